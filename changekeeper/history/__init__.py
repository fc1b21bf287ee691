"""History message generation.

Submodules:
    stringify  -- Value rendering rules (quoting, literals, date formats).
    formatter  -- HistoryFormatter with translations, prefixes and interceptor.
"""

from changekeeper.history.formatter import HistoryFormatter, normalize_intercept_result
from changekeeper.history.stringify import stringify

__all__ = ["HistoryFormatter", "normalize_intercept_result", "stringify"]
