from supabase_client import supabase

EXPECTED_COLUMNS = {
    "profiles": ["id", "name", "email", "preferences", "created_at", "updated_at"],
    "translations": [
        "id",
        "user_id",
        "source_text",
        "translated_text",
        "source_lang",
        "target_lang",
        "options",
        "is_favorite",
        "created_at",
        "updated_at",
    ],
}


def check_columns():
    if not supabase:
        print("Supabase is not configured (set SUPABASE_URL and SUPABASE_KEY).")
        return

    for table, columns in EXPECTED_COLUMNS.items():
        try:
            # An explicit select fails if any column is missing
            supabase.table(table).select(",".join(columns)).limit(1).execute()
            print(f"Table '{table}' has all expected columns.")
        except Exception as e:
            print(f"Table '{table}' is missing columns or unreachable: {e}")


if __name__ == "__main__":
    check_columns()
