import textwrap
from io import BytesIO

from PIL import Image, ImageDraw, ImageFont


def generate_placeholder_image(
    caption: str,
    size: str = "800x800",
    bg_color: tuple[int, int, int] = (6, 26, 48),
    fg_color: tuple[int, int, int] = (220, 235, 255),
) -> bytes:
    """
    Render a plain placeholder card with the caption centered on it.
    Returns PNG bytes.
    """
    w, h = (int(x) for x in size.lower().split("x"))

    img = Image.new("RGB", (w, h), bg_color)
    draw = ImageDraw.Draw(img)

    try:
        font = ImageFont.truetype("arial.ttf", size=int(w * 0.05))
    except OSError:
        font = ImageFont.load_default()

    wrapped = textwrap.fill(caption, width=24)
    left, top, right, bottom = draw.multiline_textbbox((0, 0), wrapped, font=font)

    draw.multiline_text(
        ((w - (right - left)) / 2, (h - (bottom - top)) / 2),
        wrapped,
        font=font,
        fill=fg_color,
        spacing=4,
        align="center",
    )

    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
