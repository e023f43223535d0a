#!/usr/bin/env python

from ledger.bootstrap import main

main()
