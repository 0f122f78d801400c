# SPDX-License-Identifier: MIT
"""Core planning: triples, classification, sources, options and plans."""
