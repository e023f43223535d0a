config = {
    'database_url': None,
    'sentry_dsn': None,
    'app_release': None,
    'sentry_environment': None,
}
