from postgrest import SyncRequestBuilder, SyncSelectRequestBuilder
from supabase import Client

from starter.constants import USERS_TABLE
from starter.supabase.columns import Column
from starter.supabase.helpers import cols


class Table:
    TABLE_NAME = ""
    ID = Column("id")

    @classmethod
    def query(cls, client: Client) -> SyncRequestBuilder:
        return client.table(cls.TABLE_NAME)


class Users(Table):
    TABLE_NAME = USERS_TABLE

    CLERK_ID = Column("clerkId")
    EMAIL = Column("email")
    NAME = Column("name")
    CREATED_AT = Column("created_at")
    UPDATED_AT = Column("updated_at")

    @classmethod
    def select_by_clerk_id(cls, client: Client, clerk_id: str, *columns: Column) -> SyncSelectRequestBuilder:
        return cls.query(client).select(cols(*columns)).eq(cls.CLERK_ID, clerk_id).single()
