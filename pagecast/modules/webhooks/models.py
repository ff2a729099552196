# Supabase table: webhooks
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

webhooks:
- id: uuid (primary key, default gen_random_uuid())
- name: text (not null)
- url: text (not null)
- active: boolean (default false) - at most one row is active
- created_by: uuid (references auth.users.id ON DELETE SET NULL)
- created_at: timestamptz (default: now())
- updated_at: timestamptz (default: now())

Activation is a single statement in the database so two concurrent
activations cannot leave two rows active:

    CREATE OR REPLACE FUNCTION public.activate_webhook(webhook_id uuid)
    RETURNS void LANGUAGE sql SECURITY DEFINER AS $$
        UPDATE public.webhooks
        SET active = (id = webhook_id), updated_at = now()
        WHERE active = true OR id = webhook_id;
    $$;
"""
