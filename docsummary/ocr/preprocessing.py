import io

from PIL import Image, ImageFilter, ImageOps

CONTRAST_CUTOFF_PERCENT = 5


def preprocess_image(image_bytes: bytes) -> Image.Image:
    """Grayscale, stretch contrast, sharpen and denoise an image for OCR.

    The darkest and lightest 5% of the histogram are clipped before the
    contrast stretch.
    """
    with Image.open(io.BytesIO(image_bytes)) as image:
        gray = ImageOps.grayscale(image)
    normalized = ImageOps.autocontrast(gray, cutoff=CONTRAST_CUTOFF_PERCENT)
    sharpened = normalized.filter(ImageFilter.UnsharpMask(radius=2, percent=150, threshold=3))
    return sharpened.filter(ImageFilter.MedianFilter(size=3))
