from __future__ import annotations

OK = 0
ERR_DRIFT = 1
ERR_USAGE = 2
ERR_MISSING_INPUT = 3
ERR_MALFORMED_INPUT = 4
ERR_VALIDATION = 5
ERR_BUILD = 6
ERR_BUILD_OUTPUT = 7
ERR_CONFIG = 8
ERR_INTERNAL = 99
