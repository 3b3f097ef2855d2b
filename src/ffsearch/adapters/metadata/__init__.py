from .pillow_exif import PillowExifDecoder

__all__ = ["PillowExifDecoder"]
