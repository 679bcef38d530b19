class RecipePipelineError(RuntimeError):
    """Base for every failure the generation pipeline reports.

    ``error_class`` is a short, stable label that is safe to log and to count;
    the message may carry upstream details and is never shown to users.
    """

    error_class = "pipeline_error"

    def __init__(self, message: str, error_class: str | None = None) -> None:
        super().__init__(message)
        if error_class is not None:
            self.error_class = error_class


class PreferenceValidationError(RecipePipelineError):
    MISSING_DISH_TYPE = "missing_dish_type"
    NO_CUISINE_SELECTED = "no_cuisine_selected"
    TOO_MANY_CUISINES = "too_many_cuisines"

    _MESSAGES = {
        MISSING_DISH_TYPE: "Please select a dish type.",
        NO_CUISINE_SELECTED: "Please select at least one cuisine.",
        TOO_MANY_CUISINES: "Please select no more than 2 cuisines.",
    }

    def __init__(self, reason: str) -> None:
        super().__init__(self._MESSAGES.get(reason, reason), error_class=reason)
        self.reason = reason


class AuthConfigError(RecipePipelineError):
    error_class = "auth_config"


class TransportError(RecipePipelineError):
    error_class = "transport"


class UpstreamError(RecipePipelineError):
    error_class = "upstream"

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Upstream returned HTTP {status_code}")
        self.status_code = status_code
        self.body = body


class ParseError(RecipePipelineError):
    MISSING_CONTENT = "missing_content"
    MALFORMED_PAYLOAD = "malformed_payload"
    MISSING_RECIPE_LIST = "missing_recipe_list"
    NO_VALID_RECIPES = "no_valid_recipes"

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message, error_class=reason)
        self.reason = reason


class PersistError(RecipePipelineError):
    STORE_REJECTED = "store_rejected"

    def __init__(self, recipe_id: str, message: str = "Catalog store rejected recipe") -> None:
        super().__init__(message, error_class=self.STORE_REJECTED)
        self.recipe_id = recipe_id
        self.reason = self.STORE_REJECTED
