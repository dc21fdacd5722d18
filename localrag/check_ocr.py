#!/usr/bin/env python3
"""
OCR Test Tool
Check text extraction on images before running the RAG pipeline

Usage:
  python -m localrag.check_ocr <filename>     # OCR one image from the images folder
  python -m localrag.check_ocr                # List available images
"""

import pathlib
import sys
from .ocr_processor import OCRProcessor, list_images
from .settings import settings


def list_available_images(images_dir=None):
    """List supported images in the images folder"""
    data_dir = pathlib.Path(images_dir or settings.images_dir)
    images = list_images(data_dir)

    if not images:
        print(f"❌ No images found in {data_dir}")
        return []

    print("🖼️ Available images:")
    for i, img in enumerate(images, 1):
        size_kb = img.stat().st_size / 1024
        print(f"  {i}. {img.name} ({size_kb:.1f} KB)")
    return images


def check_image(image_filename, images_dir=None, processor=None):
    image_path = pathlib.Path(images_dir or settings.images_dir) / image_filename

    if not image_path.exists():
        print(f"❌ File not found: {image_path}")
        print("\nTip: Use 'python -m localrag.check_ocr' to list available files")
        return False

    processor = processor or OCRProcessor(settings.ocr_languages, settings.inference_dir)
    print(f"🔍 Testing OCR for: {image_filename}")

    caps = processor.get_capabilities()
    print("🛠️ System capabilities:")
    for key, value in caps.items():
        status = "✅" if value else "❌"
        print(f"   {status} {key}: {value}")

    print("\n⏳ Starting text extraction...")
    try:
        text = processor.extract_text(image_path)
    except Exception as e:
        print(f"❌ Error during extraction: {e}")
        return False

    if not text:
        print("❌ No text extracted")
        return False

    print("✅ SUCCESS!")
    print(f"📊 Extracted {len(text)} characters, {len(text.split())} words")
    print("\n📄 Content preview (first 500 chars):")
    print("=" * 60)
    print(text[:500] + ("..." if len(text) > 500 else ""))
    print("=" * 60)
    return True


if __name__ == "__main__":
    print("🔧 OCR Test Tool")
    print("=" * 40)

    if len(sys.argv) > 1:
        sys.exit(0 if check_image(sys.argv[1]) else 1)
    else:
        list_available_images()
        print("\nUsage: python -m localrag.check_ocr <filename>")
        sys.exit(0)
