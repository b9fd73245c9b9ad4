# Supabase table: friends
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

friends:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null) - who sent the request
- friend_id: uuid (foreign key to auth.users.id, not null) - who received it
- status: text (not null, default: 'pending') - values: pending, accepted, rejected
- created_at: timestamp (default: now())
- unique constraint on (user_id, friend_id)

RPC get_friends(p_user_id uuid):
    one row per relation in either direction:
    friend_id, username, email, display_name, avatar_url, status, is_sender
"""
