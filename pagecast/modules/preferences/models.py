# Supabase table: user_preferences
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

user_preferences:
- user_id: uuid (primary key, references auth.users.id ON DELETE CASCADE)
- language: text (not null, default 'en', CHECK language IN ('en', 'tr'))
- created_at: timestamptz (default: now())
- updated_at: timestamptz (default: now())

A row is provisioned with language 'en' when the account is created.
Only the account itself may read or change its preferences.
"""
