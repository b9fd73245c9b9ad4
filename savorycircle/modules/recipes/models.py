# Supabase table: daily_recipes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

daily_recipes:
- id: integer (primary key, Spoonacular recipe id)
- date: date (unique, UTC day the recipe was featured)
- recipe_data: jsonb (random recipe merged with detailed information and
  a nutrition object {nutrients: [{name, amount, unit}]})
- created_at: timestamp (default: now())

Rows are written only by the service-role client from the cron job.
"""
