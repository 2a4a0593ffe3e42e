# Copyright (C) 2025-2026 Keybinder Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.
