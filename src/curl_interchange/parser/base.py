"""Unified data models for the request/command interchange.

The parser produces these models and the generator consumes them. Auth
and body are closed unions discriminated on ``type``.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]
HTTP_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")

RawLanguage = Literal["json", "xml", "html", "javascript", "css", "text"]
QuoteStyle = Literal["unquoted", "single", "double"]


class Token(BaseModel):
    """A single shell word after quote removal."""

    model_config = ConfigDict(frozen=True)

    value: str
    quote: QuoteStyle = "unquoted"
    position: int = 0


class KeyValuePair(BaseModel):
    """A header or url-encoded pair that can be switched off in the editor."""

    key: str
    value: str = ""
    enabled: bool = True


class FormField(BaseModel):
    """A multipart form field, either literal text or a file reference."""

    key: str
    value: str = ""
    file_path: str | None = None
    type: Literal["text", "file"] = "text"
    enabled: bool = True


# --- Auth variants ---


class NoAuth(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["none"] = "none"


class BasicAuth(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["basic"] = "basic"
    username: str = ""
    password: str = ""


class BearerAuth(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["bearer"] = "bearer"
    token: str = ""
    prefix: str = "Bearer"


class ApiKeyAuth(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["apikey"] = "apikey"
    key: str = ""
    value: str = ""
    add_to: Literal["header", "query"] = "header"


class OAuth2Auth(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["oauth2"] = "oauth2"
    grant_type: Literal["client_credentials", "password"] = "client_credentials"
    client_id: str = ""
    client_secret: str = ""
    token_url: str = ""
    scope: str = ""
    client_auth: Literal["header", "body"] = "header"
    username: str | None = None
    password: str | None = None
    access_token: str | None = None


class AwsAuth(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["aws"] = "aws"
    access_key: str = ""
    secret_key: str = ""
    session_token: str | None = None
    region: str = ""
    service: str = ""


AuthConfig = Annotated[
    Union[NoAuth, BasicAuth, BearerAuth, ApiKeyAuth, OAuth2Auth, AwsAuth],
    Field(discriminator="type"),
]


# --- Body variants ---


class NoBody(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["none"] = "none"


class RawBody(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["raw"] = "raw"
    content: str = ""
    language: RawLanguage = "text"


class FormDataBody(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["form-data"] = "form-data"
    fields: list[FormField] = []


class UrlEncodedBody(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["url-encoded"] = "url-encoded"
    pairs: list[KeyValuePair] = []


class BinaryBody(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["binary"] = "binary"
    file_path: str | None = None
    file_name: str | None = None
    size: int | None = None
    content_type: str | None = None


class GraphQLBody(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["graphql"] = "graphql"
    query: str = ""
    variables: str = ""
    operation_name: str | None = None


RequestBodyConfig = Annotated[
    Union[NoBody, RawBody, FormDataBody, UrlEncodedBody, BinaryBody, GraphQLBody],
    Field(discriminator="type"),
]


class RequestOptions(BaseModel):
    """Transfer toggles kept only so a command survives a round trip."""

    model_config = ConfigDict(frozen=True)

    compressed: bool = False
    insecure: bool = False
    follow_redirects: bool = False
    include_headers: bool = False
    silent: bool = False
    verbose: bool = False
    max_redirects: int | None = None
    timeout: float | None = None  # seconds
    cookies: str = ""


class RequestConfig(BaseModel):
    """The canonical request every other part of the editor consumes."""

    model_config = ConfigDict(frozen=True)

    url: str
    method: HttpMethod = "GET"
    headers: dict[str, str] = {}
    auth: AuthConfig = NoAuth()
    body: RequestBodyConfig = NoBody()
    options: RequestOptions = RequestOptions()


# --- Results ---


class ParseIssue(BaseModel):
    """An error or warning found while reading a command."""

    kind: str
    message: str
    position: int | None = None


class ParseResult(BaseModel):
    """Outcome of ``parse_curl``: a request, or the errors that stopped it."""

    request: RequestConfig | None = None
    errors: list[ParseIssue] = []
    warnings: list[ParseIssue] = []

    @property
    def success(self) -> bool:
        return self.request is not None and not self.errors


class FidelityWarning(BaseModel):
    """Part of a request the generated command cannot reproduce exactly."""

    subject: Literal["auth", "body"]
    variant: str
    message: str


class GenerateResult(BaseModel):
    command: str
    warnings: list[FidelityWarning] = []


class ContentTypeHint(BaseModel):
    """What a body variant wants done with the Content-Type header."""

    content_type_override: str | None = None
    remove_content_type: bool = False
