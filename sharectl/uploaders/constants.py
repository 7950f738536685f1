"""Shared constants for uploader modules.

The concurrency defaults are conservative: a small local file server sharing
one disk gains little from wider fan-out.
"""

# =============================================================================
# Scheduling
# =============================================================================

# Batches larger than this are handed to the server-side archive request
ARCHIVE_THRESHOLD = 500

# Concurrent uploads per window on an unconstrained host
STANDARD_CONCURRENCY = 3

# Constrained hosts (phones, tablets, Termux) upload one file at a time
CONSTRAINED_CONCURRENCY = 1

# Pause between windows on constrained hosts
CONSTRAINED_INTER_BATCH_DELAY_MS = 500

# =============================================================================
# Transport
# =============================================================================

# Per-file deadline, measured from the moment the task starts uploading
DEFAULT_UPLOAD_DEADLINE = 60

# Percent reported by the coarse transport while a request is in flight
COARSE_MIDPOINT_PERCENT = 50

# In-flight progress never reaches 100; only a completed task does
MAX_IN_FLIGHT_PERCENT = 99

# Multipart field name expected by POST /upload
UPLOAD_FIELD_NAME = "file"

# =============================================================================
# Endpoints
# =============================================================================

UPLOAD_PATH = "/upload"
ARCHIVE_PATH = "/upload-zip"
