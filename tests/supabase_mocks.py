"""
In-memory stand-in for the Supabase client used in tests.

Mirrors the parts of the PostgREST query builder the app uses
(table().select/insert/update/delete, .eq(), .single(), .execute()) and
raises postgrest APIError with the same codes the real service returns.
"""
import uuid
from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from postgrest.exceptions import APIError


class MockSupabaseResponse:
    """Mock Supabase response object."""

    def __init__(self, data: Any, count: Optional[int] = None):
        self.data = data
        self.count = count


def api_error(code: str, message: str, details: Optional[str] = None) -> APIError:
    return APIError({"code": code, "message": message, "details": details, "hint": None})


class MockSupabaseQuery:
    """Mock Supabase query builder for chainable queries."""

    def __init__(self, table: "MockSupabaseTable", operation: str, payload: Optional[Dict] = None):
        self.table = table
        self.operation = operation
        self.payload = payload
        self._filters = []
        self._single = False

    def eq(self, column: str, value: Any):
        self._filters.append((column, value))
        return self

    def single(self):
        self._single = True
        return self

    def _matches(self, row: Dict) -> bool:
        return all(row.get(column) == value for column, value in self._filters)

    def execute(self):
        client = self.table.client
        client.executed.append((self.table.table_name, self.operation, self.payload, list(self._filters)))

        if client.next_error is not None:
            error, client.next_error = client.next_error, None
            raise error

        return getattr(self, f"_execute_{self.operation}")()

    def _execute_select(self):
        result = [deepcopy(r) for r in self.table.rows if self._matches(r)]

        if self._single:
            if len(result) != 1:
                raise api_error(
                    "PGRST116",
                    "JSON object requested, multiple (or no) rows returned",
                    f"The result contains {len(result)} rows",
                )
            return MockSupabaseResponse(result[0])

        return MockSupabaseResponse(result)

    def _execute_insert(self):
        row = {"id": str(uuid.uuid4()), "name": None, "created_at": None, "updated_at": None}
        row.update(self.payload)
        if row["created_at"] is None:
            row["created_at"] = datetime.now(timezone.utc).isoformat()

        for column in self.table.not_null:
            if row.get(column) is None:
                raise api_error("23502", f'null value in column "{column}" violates not-null constraint')

        for column in self.table.unique:
            if any(existing.get(column) == row[column] for existing in self.table.rows):
                raise api_error(
                    "23505",
                    f'duplicate key value violates unique constraint "{self.table.table_name}_{column}_key"',
                    f"Key ({column})=({row[column]}) already exists.",
                )

        self.table.rows.append(row)
        return MockSupabaseResponse([deepcopy(row)])

    def _execute_update(self):
        updated = []
        for row in self.table.rows:
            if self._matches(row):
                row.update(self.payload)
                updated.append(deepcopy(row))
        return MockSupabaseResponse(updated)

    def _execute_delete(self):
        deleted = [r for r in self.table.rows if self._matches(r)]
        self.table.rows = [r for r in self.table.rows if not self._matches(r)]
        return MockSupabaseResponse(deleted)


class MockSupabaseTable:
    """Mock for a Supabase table."""

    def __init__(self, client: "MockSupabaseClient", table_name: str, rows: List[Dict] = None):
        self.client = client
        self.table_name = table_name
        self.rows = rows if rows is not None else []
        self.not_null = ("clerkId", "email")
        self.unique = ("clerkId", "email")

    def select(self, *args, **kwargs):
        return MockSupabaseQuery(self, "select")

    def insert(self, data: Dict):
        return MockSupabaseQuery(self, "insert", data)

    def update(self, data: Dict):
        return MockSupabaseQuery(self, "update", data)

    def delete(self):
        return MockSupabaseQuery(self, "delete")


class MockSupabaseClient:
    """Mock Supabase client."""

    def __init__(self):
        self.tables = {}
        self.executed = []
        self.next_error: Optional[Exception] = None

    def table(self, table_name: str):
        """Get or create a mock table."""
        if table_name not in self.tables:
            self.tables[table_name] = MockSupabaseTable(self, table_name)
        return self.tables[table_name]

    def add_table_data(self, table_name: str, rows: List[Dict]):
        self.table(table_name).rows.extend(deepcopy(rows))

    def fail_next(self, error: Exception):
        """Make the next executed query raise ``error``."""
        self.next_error = error


def create_mock_supabase_client(initial_data: Dict[str, List[Dict]] = None) -> MockSupabaseClient:
    """
    Create a mock Supabase client with optional initial data.

    Args:
        initial_data: Dictionary mapping table names to lists of row data

    Returns:
        MockSupabaseClient instance
    """
    client = MockSupabaseClient()

    if initial_data:
        for table_name, rows in initial_data.items():
            client.add_table_data(table_name, rows)

    return client


def create_mock_user_data(
    clerk_id: str = "user_test_123",
    email: str = "test@example.com",
    name: Optional[str] = "Test User",
    **kwargs,
) -> Dict:
    """Create mock user row data with sensible defaults."""
    data = {
        "id": str(uuid.uuid4()),
        "clerkId": clerk_id,
        "email": email,
        "name": name,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "updated_at": None,
    }
    data.update(kwargs)
    return data


def setup_standard_test_data() -> Dict[str, List[Dict]]:
    """Two users, the first one matching the default signed-in subject."""
    return {
        "users": [
            create_mock_user_data(),
            create_mock_user_data(clerk_id="user_other_456", email="other@example.com", name=None),
        ]
    }
