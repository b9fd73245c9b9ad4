from postgrest.exceptions import APIError
from supabase import Client
from savorycircle.modules.setup.schemas import DatabaseCheckResult, AutoSetupResponse
import logging

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("favorite_foods", "meal_plans")
SETUP_RPCS = {
    "favorite_foods": "setup_favorite_foods_table",
    "meal_plans": "setup_meal_plans_table",
}

TABLE_MISSING = "42P01"
RLS_DENIED = "42501"
FOREIGN_KEY_VIOLATION = "23503"

PROBE_USER_ID = "00000000-0000-0000-0000-000000000000"
PROBE_FOOD_NAME = "TEST_RECORD_DELETE_ME"


def _error_message(error: APIError) -> str:
    return getattr(error, "message", None) or str(error)


class SetupService:
    """Verifies the Supabase schema the app needs and bootstraps missing tables."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _probe_table(self, table: str, result: DatabaseCheckResult) -> None:
        try:
            self.supabase.table(table).select("id").limit(1).execute()
            result.tables_exist[table] = True
        except APIError as e:
            if e.code == TABLE_MISSING:
                result.errors.append(f'Table "{table}" does not exist. Please run the setup SQL script.')
            else:
                result.errors.append(f"Error checking {table} table: {_error_message(e)}")

    def _probe_insert(self, result: DatabaseCheckResult) -> None:
        """Insert a throwaway row to see whether RLS lets users write favorite_foods.

        A foreign key violation is the expected outcome: the probe user does not
        exist, so reaching that constraint proves the insert policy passed.
        """
        try:
            self.supabase.table("favorite_foods").insert({
                "user_id": PROBE_USER_ID,
                "name": PROBE_FOOD_NAME,
                "ingredients": ["Test ingredients"]
            }).execute()
        except APIError as e:
            message = _error_message(e)
            if e.code == RLS_DENIED or "permission" in message:
                result.errors.append("RLS policies may not be set up correctly. Users need insert permissions.")
            elif e.code != FOREIGN_KEY_VIOLATION:
                result.errors.append(f"Error testing insert: {message}")
            return

        self.supabase.table("favorite_foods")\
            .delete()\
            .eq("user_id", PROBE_USER_ID)\
            .eq("name", PROBE_FOOD_NAME)\
            .execute()

    def check_database(self) -> DatabaseCheckResult:
        result = DatabaseCheckResult()
        try:
            for table in REQUIRED_TABLES:
                self._probe_table(table, result)

            if result.tables_exist["favorite_foods"]:
                self._probe_insert(result)
        except Exception as e:
            logger.error(f"Unexpected error checking database: {e}")
            result.errors.append(f"Unexpected error checking database: {e}")
            return result

        result.success = all(result.tables_exist.values()) and not result.errors
        return result

    def auto_setup(self) -> AutoSetupResponse:
        check = self.check_database()
        if check.success:
            return AutoSetupResponse(success=True, check=check)

        for table in REQUIRED_TABLES:
            if check.tables_exist[table]:
                continue
            try:
                self.supabase.rpc(SETUP_RPCS[table]).execute()
                logger.info("Created table %s", table)
            except Exception as e:
                logger.error(f"Error creating {table} table: {e}")
                check.errors.append(f"Error creating {table} table: {e}")
                return AutoSetupResponse(success=False, check=check)

        verified = self.check_database()
        return AutoSetupResponse(success=verified.success, check=verified)
