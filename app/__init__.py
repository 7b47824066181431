"""Runtime-налаштування застосунку (ENV, YAML-тема)."""
