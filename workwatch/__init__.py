# SPDX-License-Identifier: MIT
"""WorkWatch - clock in, keep activity logs, clock out."""

from workwatch._version import __version__

__all__ = ["__version__"]
