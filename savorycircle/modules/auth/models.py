# Accounts live in Supabase Auth (auth.users); this app adds one table on top
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
user_profiles (created by an on-signup trigger from auth.users):
- id: uuid (primary key, foreign key to auth.users.id)
- username: text (unique, letters / digits / underscore, 3+ characters)
- email: text
- display_name: text (nullable)
- avatar_url: text (nullable, public URL in the "avatars" bucket)
- created_at, updated_at: timestamp

Sign up copies `username` and `display_name` from user_metadata into the row.
Email confirmation and OAuth logins come back through /auth/callback?code=...
"""
