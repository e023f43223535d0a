from setuptools import setup, find_packages

with open('requirements.txt') as f:
    reqs = [line.strip() for line in f if line.strip() and not line.startswith('#')]

tests_require = [
    'pytest'
]

setup(
    name='ledger_schema',
    version='0.1',
    packages=find_packages(exclude=['migrations', 'migrations.*']),
    install_requires=reqs,
    extras_require={
        'test': tests_require
    },
    entry_points={
        'console_scripts': [
            'ledger-init-db=ledger.bootstrap:main',
            'ledger-dump-ddl=ledger.utils:dump_db_ddl'
        ]
    },
    zip_safe=True,
    python_requires='>=3.8'
)
