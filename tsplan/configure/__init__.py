# SPDX-License-Identifier: MIT
"""Configuration loading and host detection."""
