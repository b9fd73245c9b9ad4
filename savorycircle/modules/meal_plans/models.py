# Supabase table: meal_plans
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

meal_plans:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null)
- name: text (not null)
- start_date: date
- end_date: date
- plan: jsonb - {"2024-05-06": {"breakfast": {"id": ..., "name": ...} | null,
                                "lunch": ... , "dinner": ...}, ...}
- no_repeat: boolean (default: false)
- created_at: timestamp (default: now())

RLS: owner-only for every operation.
"""
