# Supabase table: favorite_foods
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

favorite_foods:
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (foreign key to auth.users.id, not null)
- name: text (not null)
- ingredients: text[] (default: '{}')
- recipe: text[] (ordered instruction steps; older rows may hold a single string)
- rating: smallint (nullable, 1-5)
- meal_types: text[] - values: breakfast, lunch, dinner, snack
- visibility: text (default: 'private') - values: public, private
- image_url: text (nullable)
- created_at: timestamp (default: now())

RLS: owners have full access; friends (accepted) and everyone for
visibility = 'public' may select.
"""
