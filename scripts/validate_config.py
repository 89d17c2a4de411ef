#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from finproj.config.loader import ConfigLoader
from finproj.errors import ConfigurationError


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)
    print(f"🔍 Validating {loader.config_dir / 'engine.yaml'}...")

    try:
        config = loader.load()
    except ConfigurationError as e:
        print(f"❌ Found {len(e.errors)} validation errors:")
        for error in e.errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)

    print("✅ Configuration is valid")
    print(f"   Cache: ttl={config.cache.ttl_seconds}s, capacity={config.cache.max_entries}")
    print(f"   Monte Carlo iterations: {config.monte_carlo.iterations}")
    print(f"   Withdrawal rate: {config.fire.withdrawal_rate:.2%}")


if __name__ == "__main__":
    main()
