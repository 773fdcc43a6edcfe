#!/usr/bin/env python3
"""Check the .env file and report which EmergeWise settings are configured."""

import sys
from pathlib import Path

ENV_TEMPLATE = """# Supabase Configuration (Required for evacuation routes and background jobs)
# Get these from: https://supabase.com/dashboard → Your Project → Settings → API
EMERGEWISE_SUPABASE_URL=https://your-project-id.supabase.co
EMERGEWISE_SUPABASE_KEY=your-service-role-key-here

# API Configuration
EMERGEWISE_API_PREFIX=/api
EMERGEWISE_LOG_LEVEL=INFO
# JSON array or comma-separated: http://localhost:5173,http://127.0.0.1:5173
# EMERGEWISE_FRONTEND_ALLOWED_ORIGINS=

# Scoring calibration (optional JSON file overriding the built-in tables)
# EMERGEWISE_SCORING_TABLES_FILE=./data/scoring_tables.json
# best_case (unknown distance/time sorts first) or worst_case (sorts last)
EMERGEWISE_MISSING_METRIC_POLICY=best_case

# OSRM Routing (Optional - the direct-line fallback is used without it)
EMERGEWISE_OSRM_BASE_URL=https://router.project-osrm.org

# Background jobs (stale alerts, daily statistics, capacity warnings)
EMERGEWISE_ENABLE_JOBS=false
"""


def _mask(value: str) -> str:
    return value[:20] + "..." + value[-6:] if len(value) > 30 else value


def main() -> int:
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("EmergeWise Environment Checker")
    print("=" * 60)

    if not env_file.exists():
        env_file.write_text(ENV_TEMPLATE, encoding="utf-8")
        print(f"✅ Created template .env file at: {env_file}")
        print("⚠️  Please edit .env and add your Supabase credentials!")
        return 0

    print(f"✅ Found .env file at: {env_file}")
    print()

    sys.path.insert(0, str(project_root / "src"))
    try:
        from emergewise.config import Settings
    except ImportError as e:
        print(f"❌ Error loading config: {e}")
        print("Make sure dependencies are installed: pip install -e .")
        return 1

    settings = Settings(_env_file=env_file)
    print(f"Supabase URL:      {settings.supabase_url or '❌ not set'}")
    print(f"Supabase key:      {_mask(settings.supabase_key) if settings.supabase_key else '❌ not set'}")
    print(f"OSRM base URL:     {settings.osrm_base_url or 'not set (direct-line fallback only)'}")
    print(f"Scoring tables:    {settings.scoring_tables_file or 'built-in defaults'}")
    print(f"Missing metrics:   {settings.missing_metric_policy}")
    print(f"Background jobs:   {'enabled' if settings.enable_jobs else 'disabled'}")
    print()

    if settings.supabase_url and settings.supabase_key:
        print("✅ SUCCESS: Supabase is configured!")
        return 0

    print("❌ ERROR: Supabase is NOT configured")
    print("1. Make sure variables start with EMERGEWISE_ prefix")
    print("2. Make sure there are no spaces around = sign")
    print("3. Restart the backend after editing .env")
    return 1


if __name__ == "__main__":
    sys.exit(main())
