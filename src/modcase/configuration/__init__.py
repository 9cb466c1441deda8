"""
Configuration management for modcase.

- **app_configuration.py**: YAML configuration loader for process-wide
  settings (web UI base URL, command prefix, default language, DM timezone,
  database and locale paths). Environment overrides are resolved once when
  the :class:`AppConfig` is built and the instance is passed to whoever needs it.

Per-guild notification settings live in the database; see
``modcase.repositories.guild_config_repo``.
"""
