# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from acceptlang.cli import BENCH_HEADER, BENCH_LANGUAGES


@pytest.fixture(scope='module')
def header():
    return BENCH_HEADER


@pytest.fixture(scope='module')
def supported():
    return list(BENCH_LANGUAGES)
