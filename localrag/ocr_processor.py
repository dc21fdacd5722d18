"""
OCR module for turning a folder of images into text.
Tesseract through pytesseract, with Pillow preprocessing.
"""

import logging
import pathlib
from typing import List, Optional, Tuple, Union

import pytesseract
from PIL import Image, ImageEnhance

logger = logging.getLogger(__name__)

IMAGE_EXT = {".jpg", ".jpeg", ".png", ".bmp"}

# Looked up in this order under the inference folder
MODEL_SUBDIRS = ("tessdata", "tessdata_best", "tessdata_fast")


def find_model_dir(inference_dir: Union[str, pathlib.Path]) -> Optional[pathlib.Path]:
    root = pathlib.Path(inference_dir)
    if not root.is_dir():
        return None
    for name in MODEL_SUBDIRS:
        candidate = root / name
        if candidate.is_dir():
            return candidate
    return None


def list_images(folder: Union[str, pathlib.Path]) -> List[pathlib.Path]:
    """Supported images directly inside folder, sorted by name. Other files are ignored."""
    root = pathlib.Path(folder)
    if not root.is_dir():
        return []
    return sorted(p for p in root.iterdir()
                  if p.is_file() and p.suffix.lower() in IMAGE_EXT)


class OCRProcessor:
    """Tesseract OCR with optional bundled model data"""

    def __init__(self, languages: str = "eng", inference_dir: Union[str, pathlib.Path, None] = None):
        self.ocr_languages = languages
        self.model_dir = find_model_dir(inference_dir) if inference_dir else None
        if self.model_dir:
            logger.info(f"Using OCR models from {self.model_dir}")

    @property
    def tesseract_config(self) -> str:
        config = "--psm 3"  # fully automatic page segmentation
        if self.model_dir:
            config += f' --tessdata-dir "{self.model_dir}"'
        return config

    def extract_text(self, image_path: pathlib.Path) -> str:
        """OCR a single image. Raises on unreadable files or engine failure."""
        with Image.open(image_path) as image:
            enhanced = self._enhance_image(image)
            text = pytesseract.image_to_string(
                enhanced,
                lang=self.ocr_languages,
                config=self.tesseract_config
            )
        return (text or "").strip()

    def extract_folder(self, folder: Union[str, pathlib.Path]) -> List[Tuple[pathlib.Path, str]]:
        """
        OCR every supported image in folder.
        Images that fail or produce no text are skipped, the batch keeps going.
        """
        root = pathlib.Path(folder)
        if not root.is_dir():
            logger.warning(f"Images folder not found: {root}")
            return []

        paths = list_images(root)
        logger.info(f"📄 Found {len(paths)} images in {root}")

        results = []
        for path in paths:
            try:
                text = self.extract_text(path)
            except Exception as e:
                logger.warning(f"OCR failed for {path.name}: {e}")
                continue
            if not text:
                logger.info(f"⚠ Skip empty OCR result: {path.name}")
                continue
            logger.debug(f"✓ OCR {path.name}: {len(text)} chars")
            results.append((path, text))
        return results

    def _enhance_image(self, image: Image.Image) -> Image.Image:
        """Grayscale, then boost contrast and sharpness"""
        if image.mode != 'L':
            image = image.convert('L')
        image = ImageEnhance.Contrast(image).enhance(1.5)
        image = ImageEnhance.Sharpness(image).enhance(2.0)
        return image

    def get_capabilities(self) -> dict:
        try:
            version = str(pytesseract.get_tesseract_version())
        except pytesseract.TesseractNotFoundError:
            version = None
        return {
            "tesseract": version is not None,
            "tesseract_version": version,
            "ocr_languages": self.ocr_languages,
            "model_dir": str(self.model_dir) if self.model_dir else None,
        }
