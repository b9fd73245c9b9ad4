# Supabase tables: user_profiles, auth.users; storage bucket: avatars
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

user_profiles:
- id: uuid (primary key, references auth.users.id)
- username: text (unique, not null) - letters, digits and underscores, 3+ chars
- email: text - synced from auth.users
- display_name: text (nullable)
- avatar_url: text (nullable) - public URL in the "avatars" bucket
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

RPC search_users(search_query text, current_user_id uuid):
    profiles whose username/email match, excluding the caller.
"""
