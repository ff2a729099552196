# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - Account credentials (auth.users table)
# - Login and session management
# - JWT token generation and validation
# - Password hashing and security

"""
Supabase Auth provides:
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users
- auth.admin.create_user() / auth.admin.delete_user() - service role only,
  used by pagecast.modules.admin.service.AdminGateway

There is no public sign-up: accounts are created by admins and owners.
The role of an account lives in public.profiles, not in auth metadata.
"""
