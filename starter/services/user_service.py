from typing import Any, Union

import httpx
from flask import current_app
from postgrest.exceptions import APIError
from pydantic import ValidationError
from supabase import Client

from starter.exceptions import UserErrorKind, UserRecordError
from starter.schemas.user import UserCreate, UserRecord, UserUpdate
from starter.services.schema import DeleteResult, UserListResult, UserResult
from starter.supabase.helpers import to_user_record_error, unwrap_or_error
from starter.supabase.tables import Users


class UserService:
    """
    Gateway to the ``users`` table.

    Every method is a single round trip to Supabase. Remote failures are never
    raised: they come back as the ``error`` half of the result, already
    classified into a UserErrorKind.
    """

    def __init__(self, client: Client):
        self.client = client

    def _execute(self, query) -> Any:
        try:
            response = query.execute()
        except (APIError, httpx.HTTPError) as e:
            raise to_user_record_error(e) from e

        return unwrap_or_error(response)

    @staticmethod
    def _to_record(row: dict) -> UserRecord:
        try:
            return UserRecord.model_validate(row)
        except ValidationError as e:
            raise UserRecordError(
                UserErrorKind.UNKNOWN,
                "Unexpected users row shape",
                details=str(e),
            ) from e

    def _log_failure(self, operation: str, clerk_id: str, error: UserRecordError):
        current_app.logger.warning(f"users.{operation} failed for clerkId={clerk_id}: {error!r}")

    def get_user_by_clerk_id(self, clerk_id: str) -> UserResult:
        """Fetch exactly one user row by Clerk id."""
        try:
            row = self._execute(Users.select_by_clerk_id(self.client, clerk_id))
            if not row:
                # maybe_single-style clients return no data instead of raising
                raise UserRecordError(UserErrorKind.NOT_FOUND, f"No user with clerkId {clerk_id}")
            user = self._to_record(row)
        except UserRecordError as e:
            self._log_failure("get", clerk_id, e)
            return UserResult.failed(e)

        return UserResult.ok(user)

    def create_user(self, fields: Union[UserCreate, dict]) -> UserResult:
        """
        Insert one user row and return it with the server-generated fields.

        Nothing is validated here beyond the shape of ``fields``; uniqueness and
        not-null violations come back from the database as errors.
        """
        if isinstance(fields, dict):
            fields = UserCreate.model_validate(fields)

        payload = fields.model_dump(exclude_none=True)
        try:
            rows = self._execute(Users.query(self.client).insert(payload))
            if not rows:
                raise UserRecordError(UserErrorKind.UNKNOWN, "Insert returned no row")
            user = self._to_record(rows[0])
        except UserRecordError as e:
            self._log_failure("create", fields.clerkId, e)
            return UserResult.failed(e)

        current_app.logger.info(f"Created user for clerkId={fields.clerkId}")
        return UserResult.ok(user)

    def update_user(self, clerk_id: str, fields: Union[UserUpdate, dict]) -> UserResult:
        """
        Update the row matching ``clerk_id`` with the fields that were set.

        Fields that were not set are omitted from the update, never nulled. An
        update that matches no row is NOT_FOUND; it never inserts.

        The PATCH is a single filtered statement, so when several rows share
        ``clerk_id`` all of them have already been changed by the time
        MULTIPLE_ROWS comes back. The error reports the duplicate, it does not
        mean nothing was written.
        """
        if isinstance(fields, dict):
            fields = UserUpdate.model_validate(fields)

        changes = fields.changes()
        if not changes:
            return self.get_user_by_clerk_id(clerk_id)

        query = Users.query(self.client).update(changes).eq(Users.CLERK_ID, clerk_id)
        try:
            rows = self._execute(query)
            if not rows:
                raise UserRecordError(UserErrorKind.NOT_FOUND, f"No user with clerkId {clerk_id}")
            if len(rows) > 1:
                # clerkId is expected to be unique; surface it rather than pick a row
                raise UserRecordError(
                    UserErrorKind.MULTIPLE_ROWS,
                    f"{len(rows)} users share clerkId {clerk_id}; all of them were updated",
                )
            user = self._to_record(rows[0])
        except UserRecordError as e:
            self._log_failure("update", clerk_id, e)
            return UserResult.failed(e)

        return UserResult.ok(user)

    def delete_user(self, clerk_id: str) -> DeleteResult:
        """Delete the row matching ``clerk_id`` and report how many rows went."""
        query = Users.query(self.client).delete().eq(Users.CLERK_ID, clerk_id)
        try:
            rows = self._execute(query)
        except UserRecordError as e:
            self._log_failure("delete", clerk_id, e)
            return DeleteResult(error=e)

        rows = rows or []
        if not rows:
            current_app.logger.info(f"Delete matched no user for clerkId={clerk_id}")

        return DeleteResult(data=rows, deleted_count=len(rows))

    def list_users(self) -> UserListResult:
        try:
            rows = self._execute(Users.query(self.client).select("*"))
            users = [self._to_record(row) for row in rows or []]
        except UserRecordError as e:
            current_app.logger.warning(f"users.list failed: {e!r}")
            return UserListResult(error=e)

        return UserListResult(data=users)
