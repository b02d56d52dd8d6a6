# SPDX-License-Identifier: AGPL-3.0-or-later
from .version import __version__  # noqa: F401

from .match import (best_match, best_match_ordered, intersection,  # noqa: F401
                    intersection_ordered, intersection_ordered_with_quality,
                    intersection_with_quality, sort_supported)
from .parse import Language, parse, parse_with_quality  # noqa: F401
from .utils import normalize_tag  # noqa: F401
