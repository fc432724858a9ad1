from __future__ import annotations

import os

# Settings() is built at import time and needs Supabase values.
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")
