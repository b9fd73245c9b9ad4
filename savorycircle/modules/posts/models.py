# Supabase tables: posts, post_likes, comments; storage bucket: post-images
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

posts:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null)
- food_id: uuid (foreign key to favorite_foods.id)
- caption: text (nullable)
- image_url: text (nullable)
- is_explore: boolean (default: true)
- likes_count: integer (maintained by trigger)
- comments_count: integer (maintained by trigger)
- created_at: timestamp (default: now())

post_likes:
- post_id: uuid (foreign key to posts.id)
- user_id: uuid (foreign key to auth.users.id)
- unique constraint on (post_id, user_id)

comments:
- id: uuid (primary key)
- post_id: uuid (foreign key to posts.id)
- user_id: uuid
- content: text (not null)
- created_at: timestamp (default: now())

RPCs create_post(p_food_id, p_caption, p_is_explore), get_explore_posts(),
get_trending_posts(). Triggers award XP: +50 for a post, +10 per like received,
+15 per comment received, +5 per comment written.
"""
