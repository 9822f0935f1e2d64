#!/usr/bin/env python3
"""Check the Supabase settings for the pickup API and create a template .env if missing."""

from pathlib import Path
import os
import sys

TEMPLATE = """# Supabase Configuration (required for pickup and driver status writes)
# Get these from: https://supabase.com/dashboard → Your Project → Settings → API
SCRAPYARD_SUPABASE_URL=https://your-project-id.supabase.co
SCRAPYARD_SUPABASE_KEY=your-service-role-key-here

# API Configuration
SCRAPYARD_API_PREFIX=/api
# JSON array or comma-separated: http://localhost:5173,http://127.0.0.1:5173
# SCRAPYARD_FRONTEND_ALLOWED_ORIGINS=

# Timezone used for "today" (personnummer century window, driver notes)
SCRAPYARD_TIMEZONE=Europe/Stockholm
"""


def _mask(value: str) -> str:
    return value[:20] + "..." + value[-10:] if len(value) > 30 else value


def main() -> int:
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Scrapyard API environment checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print(f"✅ Created template .env at: {env_file}")
        print("⚠️  Edit it and add your Supabase credentials, then run this script again.")
        return 1

    print(f"✅ Found .env file at: {env_file}")
    for line in env_file.read_text(encoding="utf-8").splitlines():
        if line.startswith("SCRAPYARD_SUPABASE_KEY="):
            name, value = line.split("=", 1)
            print(f"   {name}={_mask(value.strip())}")
        elif line and not line.startswith("#"):
            print(f"   {line}")
    print()

    for name in ("SCRAPYARD_SUPABASE_URL", "SCRAPYARD_SUPABASE_KEY"):
        value = os.getenv(name)
        print(f"{'✅' if value else 'ℹ️ '} {name} in process environment: {_mask(value) if value else 'not set'}")
    print()

    sys.path.insert(0, str(project_root / "src"))
    try:
        from scrapyard.config import settings
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        return 1

    if settings.supabase_url and settings.supabase_key:
        print("✅ SUCCESS: Supabase is configured!")
        return 0

    print("❌ ERROR: Supabase is NOT configured")
    print("1. Make sure .env exists in the project root")
    print("2. Make sure variables start with the SCRAPYARD_ prefix")
    print("3. Restart the backend after editing .env")
    return 1


if __name__ == "__main__":
    sys.exit(main())
