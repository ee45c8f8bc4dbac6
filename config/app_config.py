import os


class SupabaseConfig:
    URL = os.environ.get("SUPABASE_URL", "https://noadhwqvaxajuckpibbo.supabase.co")
    ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "")


class AppConfig:
    APP_NAME = "KESNNUR Admin"
    ORGANIZATION_NAME = "KESNNUR"
    SUPPORT_EMAIL = "kesnnur@gmail.com"
    SUPPORT_PHONE = "+254791296924"
    DEFAULT_BLOG_IMAGE = "/images/blog/default.jpg"

    ADMIN_ROLES = ['chapter_admin', 'national_admin', 'super_admin']

    ROLE_PERMISSIONS = {
        'member': {'view_events', 'view_blog'},
        'chapter_admin': {'view_events', 'view_blog', 'manage_events', 'manage_members'},
        'national_admin': {
            'view_events', 'view_blog', 'manage_events', 'manage_members',
            'manage_blog', 'manage_chapters',
        },
        'super_admin': {
            'view_events', 'view_blog', 'manage_events', 'manage_members',
            'manage_blog', 'manage_chapters', 'manage_admins', 'edit_site_files',
        },
    }

    FEATURES = {
        'newsletter': True,
        'contact_form': True,
        'site_editor': True,
        'public_stats': True,
    }


class AuthConfig:
    TOKEN_KEY = "kesnnur_auth_token"
    # JSON file backing the "remember me" token scope
    DURABLE_STORAGE_PATH = os.environ.get(
        "ADMINSITE_STORAGE_PATH",
        os.path.join(os.path.expanduser("~"), ".adminsite", "storage.json"),
    )
