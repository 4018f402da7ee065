"""Error codes and user-friendly messages.

This module defines the error catalog for statement parsing.
Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-facing explanation (Spanish, shown as-is in the UI)
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

# Error catalog for statement parsing
ERROR_CATALOG: dict[str, dict] = {
    "EXTRACT_001": {
        "code": "EXTRACT_001",
        "message": "Text extraction raised while scanning the PDF bytes",
        "user_message": (
            "No se pudo leer el contenido del PDF. Asegurate de que el archivo "
            "no este protegido con contrasena."
        ),
        "suggestion": "Descarga nuevamente el resumen sin contrasena y volve a intentar.",
        "retry_allowed": True,
    },
    "EXTRACT_002": {
        "code": "EXTRACT_002",
        "message": "Extracted text is below the minimum length (likely a scanned image)",
        "user_message": (
            "No se pudo extraer texto del PDF. El archivo puede ser una imagen "
            "escaneada. Proba con un resumen digital (no escaneado)."
        ),
        "suggestion": "Usa el resumen digital que envia el banco por mail o home banking.",
        "retry_allowed": False,
    },
    "PARSE_001": {
        "code": "PARSE_001",
        "message": "No consumption line items were found in the extracted text",
        "user_message": (
            "No se pudieron detectar consumos en el resumen. El formato del PDF "
            "puede no ser compatible. Podes cargar los gastos manualmente."
        ),
        "suggestion": "Carga los gastos manualmente desde la pantalla de gastos.",
        "retry_allowed": False,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request data failed validation",
        "user_message": "Los datos enviados no son validos.",
        "suggestion": "Revisa los datos e intenta nuevamente.",
        "retry_allowed": True,
    },
    # API-specific errors
    "API_001": {
        "code": "API_001",
        "message": "Invalid file type uploaded",
        "user_message": "El archivo debe ser un PDF.",
        "suggestion": "Subi el resumen de la tarjeta en formato PDF.",
        "retry_allowed": False,
    },
    "API_002": {
        "code": "API_002",
        "message": "File size exceeds maximum limit",
        "user_message": "El archivo es demasiado grande.",
        "suggestion": "Subi un resumen mas chico (un solo periodo por archivo).",
        "retry_allowed": False,
    },
    "API_003": {
        "code": "API_003",
        "message": "No file received",
        "user_message": "No se recibio ningun archivo.",
        "suggestion": "Selecciona el PDF del resumen y volve a intentar.",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details (a generic entry for unknown codes)
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "Ocurrio un error inesperado.",
            "suggestion": "Intenta nuevamente mas tarde.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_user_message(error_code: str) -> str:
    """Get the user-facing message for an error code."""
    return get_error(error_code)["user_message"]


def get_suggestion(error_code: str) -> str:
    """Get the actionable suggestion for an error code."""
    return get_error(error_code)["suggestion"]


def is_retryable(error_code: str) -> bool:
    """Check if an error is retryable."""
    return get_error(error_code)["retry_allowed"]
