# SPDX-License-Identifier: MIT
"""External (prebuilt) dependencies."""
