"""
Configuration: settings resolution and the Supabase client
"""
