# SPDX-License-Identifier: AGPL-3.0-or-later
__version__ = '0.0.0+unreleased'
