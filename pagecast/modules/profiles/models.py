# Supabase table: profiles (the role ledger)
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id ON DELETE CASCADE)
- email: text (not null)
- role: user_role enum ('owner', 'admin', 'user'), not null, default 'user'
- created_at: timestamptz (default: now())
- last_sign_in_at: timestamptz (nullable)
- updated_at: timestamptz (default: now())

Indexes: role, email, created_at DESC.

Rows are created by the application right after an auth user is created
(see pagecast.modules.admin.provisioning). The first owner is promoted by hand:

    UPDATE public.profiles SET role = 'owner' WHERE email = '<owner email>';

There is intentionally no API path that sets role = 'owner'.
"""
