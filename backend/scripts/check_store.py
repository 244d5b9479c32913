#!/usr/bin/env python3
"""Verify the key-value store connection and report how many tests are indexed."""

import os
import sys

# Add app to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from quizapp.core.app_exceptions import StoreError
from quizapp.core.config import settings
from quizapp.core.redis_client import create_redis_client
from quizapp.store import keys
from quizapp.store.kv import KeyValueStore

RED = "\033[0;31m"
GREEN = "\033[0;32m"
NC = "\033[0m"  # No Color


def main() -> int:
    if not settings.REDIS_URL:
        print(f"{RED}✗ No store configuration found (set REDIS_URL or KV_URL){NC}")
        return 1

    store = KeyValueStore(create_redis_client(settings))
    try:
        store.set(keys.CONNECTION_CHECK_KEY, "connected")
        value = store.get(keys.CONNECTION_CHECK_KEY)
        store.delete(keys.CONNECTION_CHECK_KEY)
        if value != "connected":
            print(f"{RED}✗ Connection test failed - unexpected value {value!r}{NC}")
            return 1
        test_count = len(store.set_members(keys.TEST_IDS_KEY))
    except StoreError as e:
        print(f"{RED}✗ Store connection failed: {e.message}{NC}")
        return 1

    print(f"{GREEN}✓ Store connection successful{NC}")
    print(f"Found {test_count} existing test(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
