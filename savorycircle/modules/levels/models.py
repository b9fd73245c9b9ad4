# Supabase table: user_levels
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

user_levels:
- user_id: uuid (primary key, foreign key to auth.users.id)
- current_xp: integer (default: 0)
- updated_at: timestamp

RPC get_level_progress(user_id) returns one row:
- current_xp, current_title, current_division, current_icon
- xp_for_next_level, progress_percentage
"""
