# Supabase table: voices
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

voices:
- id: uuid (primary key, default gen_random_uuid())
- voice_id: text (not null, unique) - external voice id from the TTS provider
- name: text (not null)
- created_by: uuid (references auth.users.id ON DELETE SET NULL)
- created_at: timestamptz (default: now())
- updated_at: timestamptz (default: now())

Every signed-in account can read voices; admins and owners manage them.
"""
