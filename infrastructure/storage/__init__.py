"""Blob storage for uploaded report media."""

from infrastructure.storage.media_storage import MediaStorage, MediaUpload, UploadedMedia, decode_data_url

__all__ = ["MediaStorage", "MediaUpload", "UploadedMedia", "decode_data_url"]
