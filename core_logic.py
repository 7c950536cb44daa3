import base64
import io
import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

import qrcode
import validators

from config import get_settings

LOGGER_NAME = "knue_shortener"

# --- LOGGING SETUP ---

def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Configure the application logger, with an optional rotating log file."""
    logger = logging.getLogger(LOGGER_NAME)
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    if not logger.handlers:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
        )

        console_handler = logging.StreamHandler()
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if log_file:
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=10_485_760,
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger

_settings = get_settings()
logger = setup_logging(_settings.log_level, _settings.log_file)

# --- REDIRECT SAFETY ---

def is_trusted_redirect(url: Optional[str], trusted_prefix: str) -> bool:
    """Checks a redirect target before navigation: it must be a well-formed URL under the trusted prefix."""
    if not url or not isinstance(url, str):
        return False
    if not url.startswith(trusted_prefix):
        return False
    return bool(validators.url(url))

# --- QR CODE GENERATION ---

def generate_qr_code_data_uri(text: str, box_size: int = 10, border: int = 2) -> str:
    """Generate QR code as base64 data URI"""
    try:
        img = qrcode.make(text, box_size=box_size, border=border)
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        b64_str = base64.b64encode(buf.getvalue()).decode("utf-8")
        return f"data:image/png;base64,{b64_str}"
    except Exception as e:
        logger.error(f"Failed to generate QR code: {e}")
        raise


def decode_data_uri(data_uri: str) -> bytes:
    """Returns the raw bytes of a base64 data URI produced by generate_qr_code_data_uri."""
    header, _, b64_str = data_uri.partition(",")
    if not header.endswith(";base64") or not b64_str:
        raise ValueError("Not a base64 data URI")
    return base64.b64decode(b64_str)
