from __future__ import annotations

import io

import qrcode

from .model import Location


def make_location_qr_png(location: Location, *, box_size: int = 10, border: int = 2) -> bytes:
    """Render the QR code workers scan at a location; it encodes the place identifier."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(location.place_identifier)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
