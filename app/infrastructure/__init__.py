"""Infrastructure modules for the multilang engine.

Centralized infrastructure components:
- configuration: Settings management (Settings, MultilangSettings, I18nSettings)
- logging: Structured logging (get_module_logger, bind_job_context)
- i18n: Translation catalogs, CLDR plural rules and pattern rewriting
- operations: Operation results (OperationResult, OperationStatus)
- persistence: Locked JSON file storage
- services: Dependency injection providers (get_settings)

Subpackages are imported explicitly by callers; this package does not
re-export them so that importing one piece never loads the others.
"""
