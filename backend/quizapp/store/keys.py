"""Keyspace helpers.

| key                            | value                       |
|--------------------------------|-----------------------------|
| ``test:ids``                   | set of test ids             |
| ``test:<id>``                  | test record                 |
| ``test:<id>:results``          | set of result ids           |
| ``test:<id>:result:<resultId>``| result record               |
| ``healthcheck:connection``     | scratch value for the store check script |
"""

TEST_IDS_KEY = "test:ids"
# Outside the ``test:`` namespace so it can never collide with a test id.
CONNECTION_CHECK_KEY = "healthcheck:connection"


def test_key(test_id: str) -> str:
    return f"test:{test_id}"


def results_index_key(test_id: str) -> str:
    return f"test:{test_id}:results"


def result_key(test_id: str, result_id: str) -> str:
    return f"test:{test_id}:result:{result_id}"
