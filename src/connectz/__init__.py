"""ConnectZ — profiles, collaboration board, and wallet for music professionals.

The core is a declarative field validation engine::

    from connectz import RuleChain

    chain = RuleChain.parse("required:Password|minLength:8|password:medium")
    result = chain.evaluate("abcdefg1")
    # ValidationResult(valid=False, message="Password must be 8+ characters ...")

Forms bind rule chains to controls and track per-field state::

    from connectz import Control, FormBinder

    binder = FormBinder("signup", [Control("email", rules="required|email")])
    outcome = binder.submit()

Thin service glue (Stripe checkout, Google geocoding, the sample board)
lives in ``connectz.services``.
"""

__version__ = "0.1.0"
__all__ = [
    "AppConfig",
    "BadRequest",
    "ConfigurationError",
    "ConnectzError",
    "Control",
    "FieldState",
    "FileRules",
    "FormBinder",
    "FormConfig",
    "FormData",
    "FormValid",
    "HTTPError",
    "RuleChain",
    "UploadFile",
    "ValidationResult",
    "validate",
    "validate_file",
]

# Public name -> defining module. Resolved on first attribute access.
_LAZY_IMPORTS: dict[str, str] = {
    "AppConfig": "connectz.config",
    "FormConfig": "connectz.config",
    "BadRequest": "connectz.errors",
    "ConfigurationError": "connectz.errors",
    "ConnectzError": "connectz.errors",
    "HTTPError": "connectz.errors",
    "Control": "connectz.forms.binding",
    "FieldState": "connectz.forms.binding",
    "FormBinder": "connectz.forms.binding",
    "FormValid": "connectz.forms.binding",
    "FormData": "connectz.forms.data",
    "UploadFile": "connectz.forms.data",
    "FileRules": "connectz.validation.files",
    "validate_file": "connectz.validation.files",
    "RuleChain": "connectz.validation.chain",
    "ValidationResult": "connectz.validation.result",
    "validate": "connectz.validation",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import connectz`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
