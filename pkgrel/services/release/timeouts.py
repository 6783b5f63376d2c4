from __future__ import annotations

# gh CLI operations (release create/edit, pr create)
GH_TIMEOUT_SECONDS = 60.0

# Asset uploads can be large
GH_UPLOAD_TIMEOUT_SECONDS = 15 * 60.0

# GitHub REST reads
HTTP_TIMEOUT_SECONDS = 30.0
