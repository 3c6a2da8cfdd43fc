# Package exports - these allow cleaner imports like:
# from storefront.auth import require_admin, token_manager
from storefront.auth.jwt_tokens import token_manager
from storefront.auth.dependencies import require_admin, get_optional_admin, ADMIN_COOKIE_NAME
from storefront.auth.rate_limiter import login_rate_limiter, get_client_ip
