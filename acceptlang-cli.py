#!/usr/bin/python3
# SPDX-License-Identifier: AGPL-3.0-or-later

# Simple helper to run the acceptlang command line directly from the source
# tree. It is doing exactly the same as the console_scripts entry point.

import sys

from acceptlang.cli.__main__ import main

sys.exit(main())
