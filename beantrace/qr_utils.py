# beantrace/qr_utils.py
from io import BytesIO

import qrcode
from PIL import Image, ImageDraw, ImageFont

LABEL_HEIGHT = 50


def _label_font():
    try:
        return ImageFont.truetype("arial.ttf", 18)
    except OSError:
        return ImageFont.load_default()


def labelled_qr_png(data: str, label: str) -> BytesIO:
    """PNG of a QR code for `data` with `label` centred underneath."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=8,
        border=4,
    )
    qr.add_data(data)
    qr.make(fit=True)
    qr_img = qr.make_image(fill_color="black", back_color="white").convert("RGB")

    qr_width, qr_height = qr_img.size
    final_img = Image.new("RGB", (qr_width, qr_height + LABEL_HEIGHT), "white")
    final_img.paste(qr_img, (0, 0))

    draw = ImageDraw.Draw(final_img)
    font = _label_font()
    bbox = draw.textbbox((0, 0), label, font=font)
    x = (qr_width - (bbox[2] - bbox[0])) // 2
    draw.text((x, qr_height + 10), label, fill="black", font=font)

    buf = BytesIO()
    final_img.save(buf, format="PNG")
    buf.seek(0)
    return buf
