"""
Shared module for common utilities used by the REST API.

STRUCTURE:
- shared.security: Authentication, authorization, rate limiting
  - auth.py: JWT signing/verification, current_user_context, require_admin
  - password.py: Bcrypt hashing
  - rate_limit.py: Login rate limiting (slowapi)

- shared.infrastructure: Database and request tracing
  - db.py: SQLAlchemy sessions, safe_commit()
  - correlation.py: X-Request-ID propagation

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Roles, limits, defaults

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - validators.py: Input sanitization helpers
  - schemas.py / admin_schemas.py: Pydantic schemas

IMPORT EXAMPLES:
    from shared.security.auth import current_user_context, require_admin
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.utils.exceptions import NotFoundError, ForbiddenError
"""
