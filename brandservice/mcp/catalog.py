"""
MCP tool catalog

One EndpointDescriptor per tool. The order here is the order tools are
advertised in tools/list.
"""
from typing import Any, Dict, List, Optional

from brandservice.mcp import handlers as h
from brandservice.mcp.endpoints import (
    BINARY,
    BODY,
    ID_SCHEMA_TYPE,
    EndpointDescriptor,
    Param,
    body_param,
    path_param,
    query_param,
)

RATE_LIMIT_TIERS = ["FREE_TIER", "PRO_TIER", "ENTERPRISE_TIER"]
DASHBOARD_STATUSES = ["COMPLETED", "PROCESSING", "FAILED"]

API_KEYS = "/api/v1/api-keys"
ADMIN_API_KEYS = "/api/admin/api-keys"
ADDONS = "/api/v1/api-keys/addons"


def _string(description: str) -> Dict[str, Any]:
    return {"type": "string", "description": description}


def _strings(description: str) -> Dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}, "description": description}


def _integer(description: str) -> Dict[str, Any]:
    return {"type": "integer", "description": description}


def _boolean(description: str) -> Dict[str, Any]:
    return {"type": "boolean", "description": description}


def _api_key_options() -> tuple:
    """Optional body fields shared by the create-API-key tools"""
    return (
        body_param("description", _string("Optional description")),
        body_param("prefix", _string("Optional key prefix (e.g., sk-)")),
        body_param("expiresAt", _string("Optional ISO date-time for expiration")),
        body_param("allowedIps", _strings("Optional list of allowed IPs")),
        body_param("allowedDomains", _strings("Optional list of additional domains")),
        body_param("rateLimitTier", {"type": "string", "enum": RATE_LIMIT_TIERS, "description": "Optional rate limit tier"}),
        body_param("scopes", _strings("Optional list of scopes")),
    )


def _paging(default_size: int) -> tuple:
    return (
        query_param("page", _integer("Page number (0-based)"), default=0, echo=True),
        query_param("size", _integer("Page size"), default=default_size, echo=True),
    )


PROFILE_FIELDS = (
    "id", "firstName", "surname", "nationalCode", "dob", "educationLevel",
    "phoneCountry", "country", "city", "phoneNumber", "username",
)


TOOLS: List[EndpointDescriptor] = [
    # Authentication and users
    EndpointDescriptor(
        name="fetchBrandDetails",
        description="Fetch brand identity (company, logo, colors, fonts) for a website via POST /api/secure/rivofetch.",
        method="POST",
        path="/api/secure/rivofetch",
        label="Fetch brand details",
        params=(body_param("url", _string("Website URL to analyse (http/https)"), required=True, echo=True),),
        requires_auth=False,
        use_api_key=True,
        prepare=h.prepare_url,
        summary=h.brand_identity_summary,
    ),
    EndpointDescriptor(
        name="login",
        description="Authenticate via POST /auth/login. The returned tokens are cached for later authenticated calls.",
        method="POST",
        path="/auth/login",
        label="Login",
        params=(
            body_param("username", _string("Username or email"), required=True),
            body_param("password", _string("Account password"), required=True),
            body_param("tenantId", _string("Optional tenant ID")),
        ),
        requires_auth=False,
        handler=h.login,
    ),
    EndpointDescriptor(
        name="refreshToken",
        description="Rotate the access token via POST /auth/refresh using the given or cached refresh token.",
        method="POST",
        path="/auth/refresh",
        label="Refresh token",
        params=(Param("refreshToken", _string("Refresh token (defaults to the one cached at login)"), BODY),),
        requires_auth=False,
        handler=h.refresh_token,
    ),
    EndpointDescriptor(
        name="forward",
        description="Forward a request via /forward (protected) or /auth/public-forward (public). "
                    "Requires login unless isPublic=true.",
        method="POST",
        path="/forward",
        label="Forward",
        params=(
            body_param("url", _string("Target URL to forward to (http/https)"), required=True),
            body_param("method", _string("HTTP method for target request (GET, POST, etc.)")),
            body_param("headers", {"type": "object", "description": "Headers for the target request"}),
            body_param("body", {"description": "Optional body for target request (object or string)"}),
            Param("token", _string("Bearer token for protected /forward (defaults to last login)"), BODY),
            Param("brandId", {"type": ID_SCHEMA_TYPE, "description": "X-Brand-Id header for protected /forward"}, BODY),
            Param("isPublic", _boolean("Use /auth/public-forward when true; otherwise /forward"), BODY),
        ),
        requires_auth=False,
        handler=h.forward,
    ),
    EndpointDescriptor(
        name="forgotPassword",
        description="Initiate password reset. Sends a verification code to the email via POST /auth/forgot-password.",
        method="POST",
        path="/auth/forgot-password",
        label="Forgot-password",
        params=(body_param("email", _string("Email address to send the verification code"), required=True, echo=True),),
        requires_auth=False,
        summary=h.formatted("Forgot-password initiated for {email}."),
    ),
    EndpointDescriptor(
        name="resetPassword",
        description="Complete a password reset with the emailed code via POST /auth/reset-password.",
        method="POST",
        path="/auth/reset-password",
        label="Reset-password",
        params=(
            body_param("token", _string("Verification code from the reset email"), required=True),
            body_param("newPassword", _string("New password"), required=True),
        ),
        requires_auth=False,
        summary=h.fixed("Password reset successful."),
    ),
    EndpointDescriptor(
        name="getUserById",
        description="Get a user by ID via GET /api/users/userId/{id}. Requires prior login.",
        method="GET",
        path="/api/users/userId/{id}",
        label="Get user by ID",
        params=(path_param("id", "User ID"),),
        summary=h.formatted("Retrieved user {id}."),
    ),
    EndpointDescriptor(
        name="updateUserProfile",
        description="Update the authenticated user's profile via PUT /api/users/profile. Requires prior login.",
        method="PUT",
        path="/api/users/profile",
        label="Update profile",
        params=tuple(
            body_param(name, _string("Date of birth in yyyy-MM-dd" if name == "dob" else name))
            for name in PROFILE_FIELDS
        ),
        handler=h.update_user_profile,
    ),

    # Brands
    EndpointDescriptor(
        name="getBrandsPaged",
        description="List brands page by page via GET /api/brands.",
        method="GET",
        path="/api/brands",
        label="Get brands (paged)",
        params=_paging(20),
        requires_auth=False,
        summary=h.brands_paged_summary,
    ),
    EndpointDescriptor(
        name="getBrandDetailsById",
        description="Get a brand by ID via GET /api/brands/{id}. Requires prior login.",
        method="GET",
        path="/api/brands/{id}",
        label="Get brand by ID",
        params=(path_param("id", "Brand ID"),),
        summary=h.formatted("Retrieved brand {id}."),
    ),
    EndpointDescriptor(
        name="getBrandByWebsite",
        description="Get brand data by website via GET /api/brands/by-website. Requires prior login.",
        method="GET",
        path="/api/brands/by-website",
        label="Get brand by website",
        params=(query_param("website", _string("Website URL or domain"), required=True, echo=True),),
        summary=h.formatted("Fetched brand data for website {website}."),
    ),
    EndpointDescriptor(
        name="getBrandByName",
        description="Get brand data by name via GET /api/brands/by-name. Requires prior login.",
        method="GET",
        path="/api/brands/by-name",
        label="Get brand by name",
        params=(query_param("name", _string("Brand name"), required=True, echo=True),),
        summary=h.formatted("Fetched brand data for name '{name}'."),
    ),
    EndpointDescriptor(
        name="searchBrands",
        description="Search brands via GET /api/brands/search. Requires prior login.",
        method="GET",
        path="/api/brands/search",
        label="Search brands",
        params=(query_param("q", _string("Search query"), required=True, echo=True, echo_as="query"),) + _paging(20),
        summary=h.search_summary,
    ),
    EndpointDescriptor(
        name="getBrandsByDomain",
        description="List brands whose website contains a domain via GET /api/brands/by-domain. Requires prior login.",
        method="GET",
        path="/api/brands/by-domain",
        label="Get brands by domain",
        params=(query_param("domain", _string("Domain fragment"), required=True, echo=True),),
        summary=h.domain_summary,
    ),
    EndpointDescriptor(
        name="getBrandStatistics",
        description="Get brand statistics via GET /api/brands/statistics. Requires prior login.",
        method="GET",
        path="/api/brands/statistics",
        label="Get brand statistics",
        summary=h.fixed("Retrieved brand statistics."),
    ),
    EndpointDescriptor(
        name="getBrandDashboardSummary",
        description="Get dashboard summary metrics via GET /api/brands/dashboard/summary. Requires prior login.",
        method="GET",
        path="/api/brands/dashboard/summary",
        label="Get dashboard summary",
        summary=h.fixed("Retrieved dashboard summary metrics."),
    ),
    EndpointDescriptor(
        name="getBrandDashboardSearches",
        description="List recent dashboard brand searches via GET /api/brands/dashboard/brands. Requires prior login.",
        method="GET",
        path="/api/brands/dashboard/brands",
        label="Get dashboard searches",
        params=(
            query_param("search", _string("Optional search text"), echo=True, omit_blank=True),
            query_param("status", {"type": "string", "enum": DASHBOARD_STATUSES, "description": "Optional status filter"},
                        echo=True, omit_blank=True),
        ) + _paging(5),
        summary=h.dashboard_searches_summary,
    ),
    EndpointDescriptor(
        name="getBrandDashboardDetails",
        description="Get dashboard details for a brand via GET /api/brands/dashboard/brands/{brandId}/details. "
                    "Requires prior login.",
        method="GET",
        path="/api/brands/dashboard/brands/{brandId}/details",
        label="Get dashboard brand details",
        params=(path_param("brandId", "Brand ID"),),
        summary=h.dashboard_details_summary,
    ),
    EndpointDescriptor(
        name="getAllBrandsWithSearch",
        description="List all brands with optional search and pagination via GET /api/brands/all.",
        method="GET",
        path="/api/brands/all",
        label="Get all brands",
        params=(
            query_param("search", _string("Optional search text"), echo=True, omit_blank=True),
            query_param("paginated", _boolean("Return a paginated response"), default=False, echo=True),
        ) + _paging(50),
        requires_auth=False,
        summary=h.all_brands_summary,
    ),
    EndpointDescriptor(
        name="getAllBrandsLegacy",
        description="List all brands via the legacy GET /api/brands/all-brands endpoint.",
        method="GET",
        path="/api/brands/all-brands",
        label="Get all brands (legacy)",
        params=(query_param("paginated", _boolean("Return a paginated response"), default=False, echo=True),) + _paging(50),
        requires_auth=False,
        summary=h.legacy_brands_summary,
    ),
    EndpointDescriptor(
        name="serveBrandAsset",
        description="Download a brand asset via GET /api/brands/assets/{assetId}. Returns base64 content.",
        method="GET",
        path="/api/brands/assets/{assetId}",
        label="Serve brand asset",
        params=(path_param("assetId", "Asset ID"),),
        requires_auth=False,
        response_kind=BINARY,
        summary=h.binary_summary("asset", "assetId"),
    ),
    EndpointDescriptor(
        name="serveBrandImage",
        description="Download a brand image via GET /api/brands/images/{imageId}. Returns base64 content.",
        method="GET",
        path="/api/brands/images/{imageId}",
        label="Serve brand image",
        params=(path_param("imageId", "Image ID"),),
        requires_auth=False,
        response_kind=BINARY,
        summary=h.binary_summary("image", "imageId"),
    ),
    EndpointDescriptor(
        name="extractBrandData",
        description="Trigger brand extraction for a URL via POST /api/brands/extract. Requires prior login.",
        method="POST",
        path="/api/brands/extract",
        label="Extract brand data",
        params=(
            query_param("url", _string("Website URL to extract"), required=True, echo=True),
            query_param("mockResponse", _string("Optional mock payload for testing")),
        ),
        summary=h.formatted("Triggered brand extraction for {url}."),
    ),
    EndpointDescriptor(
        name="claimBrand",
        description="Claim a brand for the current user via PUT /api/brands/{id}/claim. Requires prior login.",
        method="PUT",
        path="/api/brands/{id}/claim",
        label="Claim brand",
        params=(path_param("id", "Brand ID"),),
        empty_body=True,
        summary=h.formatted("Claimed brand {id}."),
    ),
    EndpointDescriptor(
        name="getBrandPerformanceTest",
        description="Compare brand query performance via GET /api/brands/performance-test.",
        method="GET",
        path="/api/brands/performance-test",
        label="Get brand performance test",
        requires_auth=False,
        summary=h.fixed("Retrieved brand performance comparison metrics."),
    ),
    EndpointDescriptor(
        name="getBrandsByCategory",
        description="List brands in a category via GET /api/brands/category/{categoryId}. Requires prior login.",
        method="GET",
        path="/api/brands/category/{categoryId}",
        label="Get brands by category",
        params=(path_param("categoryId", "Category ID"),),
        summary=h.category_summary("Retrieved brands for category {categoryId}{suffix}."),
    ),
    EndpointDescriptor(
        name="getBrandsByCategoryAndSubcategory",
        description="List brands in a category and subcategory via "
                    "GET /api/brands/category/{categoryId}/subcategory/{subCategoryId}. Requires prior login.",
        method="GET",
        path="/api/brands/category/{categoryId}/subcategory/{subCategoryId}",
        label="Get brands by category and subcategory",
        params=(path_param("categoryId", "Category ID"), path_param("subCategoryId", "Subcategory ID")),
        summary=h.category_summary(
            "Retrieved brands for category {categoryId} & subcategory {subCategoryId}{suffix}."
        ),
    ),
    EndpointDescriptor(
        name="getBrandByIdCategoryAndSubcategory",
        description="Get a brand within a category and subcategory via "
                    "GET /api/brands/{id}/category/{categoryId}/subcategory/{subCategoryId}. Requires prior login.",
        method="GET",
        path="/api/brands/{id}/category/{categoryId}/subcategory/{subCategoryId}",
        label="Get brand by category and subcategory",
        params=(
            path_param("id", "Brand ID"),
            path_param("categoryId", "Category ID"),
            path_param("subCategoryId", "Subcategory ID"),
        ),
        summary=h.formatted("Retrieved brand {id} for category {categoryId} & subcategory {subCategoryId}."),
    ),

    # User API keys
    EndpointDescriptor(
        name="createRivoApiKey",
        description="Create an API key via POST /api/v1/api-keys/rivo-create-api with domain validation and options.",
        method="POST",
        path=f"{API_KEYS}/rivo-create-api",
        label="Create API key",
        params=(
            body_param("name", _string("API key name"), required=True),
            body_param("registeredDomain", _string("Primary registered domain (e.g., example.com)"), required=True),
        ) + _api_key_options() + (
            query_param("environment", _string("Environment query param"), default="production"),
        ),
        summary=h.formatted("API key created for domain {registeredDomain}."),
    ),
    EndpointDescriptor(
        name="getRivoApiKeys",
        description="List the current user's API keys via GET /api/v1/api-keys. Requires prior login.",
        method="GET",
        path=API_KEYS,
        label="Get API keys",
        summary=h.counted("Retrieved {count} API key(s)."),
    ),
    EndpointDescriptor(
        name="getRivoApiKeyById",
        description="Get one API key via GET /api/v1/api-keys/{keyId}. Requires prior login.",
        method="GET",
        path=f"{API_KEYS}/{{keyId}}",
        label="Get API key",
        params=(path_param("keyId", "API key ID"),),
        summary=h.formatted("Retrieved API key {keyId}."),
    ),
    EndpointDescriptor(
        name="updateRivoApiKey",
        description="Update an API key via PUT /api/v1/api-keys/{keyId}. Requires prior login.",
        method="PUT",
        path=f"{API_KEYS}/{{keyId}}",
        label="Update API key",
        params=(
            path_param("keyId", "API key ID"),
            body_param("name", _string("API key name")),
            body_param("description", _string("Description")),
            body_param("isActive", _boolean("Whether the key is active")),
            body_param("expiresAt", _string("ISO date-time for expiration")),
            body_param("allowedIps", _strings("Allowed IPs")),
            body_param("allowedDomains", _strings("Allowed domains")),
            body_param("rateLimitTier", {"type": "string", "enum": RATE_LIMIT_TIERS, "description": "Rate limit tier"}),
            body_param("isDefaultKey", _boolean("Mark as the default key")),
        ),
        summary=h.formatted("Updated API key {keyId}."),
    ),
    EndpointDescriptor(
        name="revokeRivoApiKey",
        description="Revoke an API key via PATCH /api/v1/api-keys/{keyId}/revoke. Requires prior login.",
        method="PATCH",
        path=f"{API_KEYS}/{{keyId}}/revoke",
        label="Revoke API key",
        params=(path_param("keyId", "API key ID"),),
        empty_body=True,
        summary=h.formatted("Revoked API key {keyId}."),
    ),
    EndpointDescriptor(
        name="regenerateRivoApiKey",
        description="Regenerate an API key secret via POST /api/v1/api-keys/{keyId}/regenerate. Requires prior login.",
        method="POST",
        path=f"{API_KEYS}/{{keyId}}/regenerate",
        label="Regenerate API key",
        params=(path_param("keyId", "API key ID"),),
        empty_body=True,
        summary=h.formatted("Regenerated API key {keyId}."),
    ),
    EndpointDescriptor(
        name="deleteRivoApiKey",
        description="Delete an API key via DELETE /api/v1/api-keys/{keyId}. Requires prior login.",
        method="DELETE",
        path=f"{API_KEYS}/{{keyId}}",
        label="Delete API key",
        params=(path_param("keyId", "API key ID"),),
        summary=h.formatted("Deleted API key {keyId}."),
    ),

    # Admin API keys
    EndpointDescriptor(
        name="adminGetAllApiKeys",
        description="Admin: Retrieve all API keys across every user via GET /api/admin/api-keys/all. Requires ADMIN role.",
        method="GET",
        path=f"{ADMIN_API_KEYS}/all",
        label="Admin get all API keys",
        accepts_arguments=False,
        summary=h.counted("Admin retrieved {count} API key(s)."),
    ),
    EndpointDescriptor(
        name="adminGetApiKeysForUser",
        description="Admin: Retrieve API keys for a specific user via GET /api/admin/api-keys/user/{userId}.",
        method="GET",
        path=f"{ADMIN_API_KEYS}/user/{{userId}}",
        label="Admin get API keys for user",
        params=(path_param("userId", "Target user's ID"),),
        summary=h.counted("Admin retrieved {count} API key(s) for user {userId}."),
    ),
    EndpointDescriptor(
        name="adminCreateApiKeyForUser",
        description="Admin: Create an API key for a user via POST /api/admin/api-keys/user/{userId}.",
        method="POST",
        path=f"{ADMIN_API_KEYS}/user/{{userId}}",
        label="Admin create API key for user",
        params=(
            path_param("userId", "Target user's ID"),
            body_param("name", _string("API key name"), required=True),
            body_param("registeredDomain", _string("Primary registered domain"), required=True),
        ) + _api_key_options(),
        summary=h.formatted("Admin created an API key for user {userId} ({registeredDomain})."),
    ),
    EndpointDescriptor(
        name="adminRevokeApiKey",
        description="Admin: Revoke any API key via PATCH /api/admin/api-keys/{keyId}/revoke.",
        method="PATCH",
        path=f"{ADMIN_API_KEYS}/{{keyId}}/revoke",
        label="Admin revoke API key",
        params=(path_param("keyId", "API key ID"),),
        summary=h.formatted("Admin revoked API key {keyId}."),
    ),
    EndpointDescriptor(
        name="adminDeleteApiKey",
        description="Admin: Delete any API key via DELETE /api/admin/api-keys/{keyId}.",
        method="DELETE",
        path=f"{ADMIN_API_KEYS}/{{keyId}}",
        label="Admin delete API key",
        params=(path_param("keyId", "API key ID"),),
        summary=h.formatted("Admin deleted API key {keyId}."),
    ),
    EndpointDescriptor(
        name="adminGetApiKeyUsage",
        description="Admin: Get usage statistics for an API key via GET /api/admin/api-keys/{keyId}/usage.",
        method="GET",
        path=f"{ADMIN_API_KEYS}/{{keyId}}/usage",
        label="Admin get API key usage",
        params=(path_param("keyId", "API key ID"),),
        summary=h.formatted("Admin retrieved usage for API key {keyId}."),
    ),
    EndpointDescriptor(
        name="adminGetApiKeySystemStats",
        description="Admin: Get system-wide API key statistics via GET /api/admin/api-keys/stats.",
        method="GET",
        path=f"{ADMIN_API_KEYS}/stats",
        label="Admin get API key system stats",
        accepts_arguments=False,
        summary=h.fixed("Admin retrieved system-wide API key stats."),
    ),
    EndpointDescriptor(
        name="adminResetApiKeyRateLimit",
        description="Admin: Reset rate limits for an API key via POST /api/admin/api-keys/{keyId}/rate-limit/reset.",
        method="POST",
        path=f"{ADMIN_API_KEYS}/{{keyId}}/rate-limit/reset",
        label="Admin reset API key rate limit",
        params=(path_param("keyId", "API key ID"),),
        summary=h.formatted("Admin reset rate limits for API key {keyId}."),
    ),
    EndpointDescriptor(
        name="adminUpdateApiKeyScopes",
        description="Admin: Replace the scopes of an API key via PUT /api/admin/api-keys/{keyId}/scopes.",
        method="PUT",
        path=f"{ADMIN_API_KEYS}/{{keyId}}/scopes",
        label="Admin update API key scopes",
        params=(
            path_param("keyId", "API key ID"),
            body_param(
                "scopes",
                {
                    "anyOf": [{"type": "string"}, {"type": "array", "items": {"type": "string"}}],
                    "description": "Comma-separated string or list of scopes",
                },
                required=True,
                echo=True,
            ),
        ),
        prepare=h.prepare_scopes,
        summary=h.formatted("Admin updated scopes for API key {keyId}."),
    ),

    # Add-ons
    EndpointDescriptor(
        name="getAddOnPackages",
        description="List purchasable add-on packages via GET /api/v1/api-keys/addons/packages.",
        method="GET",
        path=f"{ADDONS}/packages",
        label="Get add-on packages",
        accepts_arguments=False,
        summary=h.counted("Retrieved {count} add-on package(s)."),
    ),
    EndpointDescriptor(
        name="purchaseAddOn",
        description="Purchase an add-on package via POST /api/v1/api-keys/addons/purchase.",
        method="POST",
        path=f"{ADDONS}/purchase",
        label="Purchase add-on",
        params=(
            body_param("apiKeyId", {"type": ID_SCHEMA_TYPE, "description": "Target API key ID"}, required=True, echo=True),
            body_param("addOnPackage", _string("Add-on package identifier"), required=True),
            body_param("durationMonths", {"type": ["integer", "string"], "description": "Duration in months (>=1)"}),
            body_param("autoRenew", _boolean("Enable auto-renewal")),
            body_param("reason", _string("Purchase reason or notes")),
            body_param("customRequests", _integer("Custom request count (for ADDON_CUSTOM)")),
            body_param("customPrice", {"type": "number", "description": "Custom price (for ADDON_CUSTOM)"}),
        ),
        prepare=h.prepare_purchase,
        summary=h.formatted("Purchased {addOnPackage} for API key {apiKeyId}."),
    ),
    EndpointDescriptor(
        name="getAddOnsForApiKey",
        description="List add-ons for an API key via GET /api/v1/api-keys/addons/{apiKeyId}.",
        method="GET",
        path=f"{ADDONS}/{{apiKeyId}}",
        label="Get add-ons for API key",
        params=(path_param("apiKeyId", "API key ID"),),
        summary=h.counted("Retrieved {count} add-on(s) for API key {apiKeyId}."),
    ),
    EndpointDescriptor(
        name="getActiveAddOnsForApiKey",
        description="List active add-ons for an API key via GET /api/v1/api-keys/addons/{apiKeyId}/active.",
        method="GET",
        path=f"{ADDONS}/{{apiKeyId}}/active",
        label="Get active add-ons for API key",
        params=(path_param("apiKeyId", "API key ID"),),
        summary=h.counted("Retrieved {count} active add-on(s) for API key {apiKeyId}."),
    ),
    EndpointDescriptor(
        name="getAddOnRecommendations",
        description="Recommend add-ons for an API key via GET /api/v1/api-keys/addons/{apiKeyId}/recommendations.",
        method="GET",
        path=f"{ADDONS}/{{apiKeyId}}/recommendations",
        label="Get add-on recommendations",
        params=(
            path_param("apiKeyId", "API key ID"),
            query_param("overageRequests", {"type": ["number", "string"], "description": "Observed overage requests (>=0)"},
                        default=0, echo=True),
        ),
        prepare=h.prepare_recommendations,
        summary=h.formatted("Generated add-on recommendations for API key {apiKeyId}."),
    ),
    EndpointDescriptor(
        name="cancelAddOn",
        description="Cancel an add-on via POST /api/v1/api-keys/addons/{addOnId}/cancel.",
        method="POST",
        path=f"{ADDONS}/{{addOnId}}/cancel",
        label="Cancel add-on",
        params=(
            path_param("addOnId", "Add-on ID"),
            query_param("reason", _string("Optional cancellation reason"), echo=True, omit_blank=True),
        ),
        summary=h.formatted("Cancelled add-on {addOnId}."),
    ),
    EndpointDescriptor(
        name="renewAddOn",
        description="Renew an add-on via POST /api/v1/api-keys/addons/{addOnId}/renew.",
        method="POST",
        path=f"{ADDONS}/{{addOnId}}/renew",
        label="Renew add-on",
        params=(
            path_param("addOnId", "Add-on ID"),
            query_param("durationMonths", {"type": ["integer", "string"], "description": "Renewal length in months (>=1)"},
                        default=1, echo=True),
        ),
        prepare=h.prepare_renewal,
        summary=h.renew_summary,
    ),
    EndpointDescriptor(
        name="getExpiringAddOns",
        description="List add-ons that are about to expire via GET /api/v1/api-keys/addons/expiring.",
        method="GET",
        path=f"{ADDONS}/expiring",
        label="Get expiring add-ons",
        accepts_arguments=False,
        summary=h.counted("Retrieved {count} expiring add-on(s)."),
    ),
    EndpointDescriptor(
        name="getNearlyExhaustedAddOns",
        description="List add-ons close to their request quota via GET /api/v1/api-keys/addons/nearly-exhausted.",
        method="GET",
        path=f"{ADDONS}/nearly-exhausted",
        label="Get nearly exhausted add-ons",
        accepts_arguments=False,
        summary=h.counted("Retrieved {count} nearly exhausted add-on(s)."),
    ),
    EndpointDescriptor(
        name="processAutoRenewals",
        description="Run add-on auto-renewals via POST /api/v1/api-keys/addons/process-auto-renewals.",
        method="POST",
        path=f"{ADDONS}/process-auto-renewals",
        label="Process add-on auto-renewals",
        accepts_arguments=False,
        summary=h.fixed("Processed add-on auto-renewals."),
    ),
    EndpointDescriptor(
        name="cleanupExpiredAddOns",
        description="Remove expired add-ons via POST /api/v1/api-keys/addons/cleanup-expired.",
        method="POST",
        path=f"{ADDONS}/cleanup-expired",
        label="Cleanup expired add-ons",
        accepts_arguments=False,
        summary=h.fixed("Cleaned up expired add-ons."),
    ),
]

_TOOLS_BY_NAME: Dict[str, EndpointDescriptor] = {tool.name: tool for tool in TOOLS}


def get_endpoint(name: Optional[str]) -> Optional[EndpointDescriptor]:
    return _TOOLS_BY_NAME.get(name) if name else None


def tool_names() -> List[str]:
    return [tool.name for tool in TOOLS]


def list_tools() -> List[Dict[str, Any]]:
    """List all available MCP tools"""
    return [tool.to_tool() for tool in TOOLS]
