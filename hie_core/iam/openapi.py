from drf_spectacular.extensions import OpenApiAuthenticationExtension


class CookieOrHeaderJWTAuthenticationScheme(OpenApiAuthenticationExtension):
    target_class = "hie_core.iam.auth.CookieOrHeaderJWTAuthentication"
    name = "BearerOrCookieJWT"

    def get_security_definition(self, auto_schema):
        # Documented as Bearer JWT so Swagger "Authorize" works; cookies are accepted too.
        return {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": (
                "Send access token via `Authorization: Bearer <token>` "
                "or via HttpOnly cookie (hie_access)."
            ),
        }
