import hashlib

from PIL import Image, ImageDraw, ImageFont

from attendance_dashboard.constants import AVATAR_SIZE


def initials(name: str) -> str:
    parts = [p for p in name.split() if p]
    if not parts:
        return "?"
    if len(parts) == 1:
        return parts[0][:2].upper()
    return (parts[0][0] + parts[-1][0]).upper()


def avatar_color(name: str):
    digest = hashlib.md5(name.encode("utf-8")).digest()
    # keep it dark enough for white text
    return tuple(64 + b % 128 for b in digest[:3])


def make_avatar(name: str, size: int = AVATAR_SIZE) -> Image.Image:
    """Round initials avatar, same colour for the same name."""
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.ellipse((0, 0, size - 1, size - 1), fill=avatar_color(name))

    text = initials(name)
    font = ImageFont.load_default()
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    x = (size - (right - left)) / 2 - left
    y = (size - (bottom - top)) / 2 - top
    draw.text((x, y), text, fill="white", font=font)
    return img


class AvatarCache:
    def __init__(self, factory, size: int = AVATAR_SIZE):
        self.factory = factory
        self.size = size
        self._images = {}

    def get(self, name):
        if name not in self._images:
            self._images[name] = self.factory(make_avatar(name, self.size))
        return self._images[name]
