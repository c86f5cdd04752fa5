"""QR code generation for labels."""

import base64
import io
import logging

import qrcode
from PIL import Image

logger = logging.getLogger(__name__)

DEFAULT_QR_SIZE = 200


class LabelGenerationError(Exception):
    """Exception raised when a label or its QR code cannot be generated."""

    pass


def generate_qr_code(data: str, size: int = DEFAULT_QR_SIZE) -> str:
    """Render ``data`` as a QR code PNG.

    Args:
        data: Content to encode (usually the entity URL).
        size: Edge length of the square image in pixels.

    Returns:
        A ``data:image/png;base64,...`` URI.

    Raises:
        LabelGenerationError: If the QR code cannot be built.
    """
    try:
        qr = qrcode.QRCode(
            version=None,  # Auto-size
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=1,
        )
        qr.add_data(data)
        qr.make(fit=True)

        qr_img = qr.make_image(fill_color="black", back_color="white")
        if hasattr(qr_img, "get_image"):
            image: Image.Image = qr_img.get_image()
        else:
            image = qr_img  # type: ignore[assignment]

        image = image.resize((size, size), Image.Resampling.NEAREST)

        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
    except Exception as e:
        logger.error(f"Failed to generate QR code for {data!r}: {e}")
        raise LabelGenerationError("Failed to generate QR code") from e

    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"
