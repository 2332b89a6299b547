import os
import re
import time

import cloudinary # image hosting
import cloudinary.uploader

_EXTENSION = re.compile(r"\.[A-Za-z0-9]+")


def extension_of(filename):
    """Last extension of an uploaded filename, dot included, or '' if it has none usable."""
    ext = os.path.splitext(os.path.basename(filename or ""))[1]
    return ext if _EXTENSION.fullmatch(ext) else ""


class BlobStore:
    def save(self, upload):
        """Store a werkzeug FileStorage and return the URL it is served from."""
        raise NotImplementedError


class DiskBlobStore(BlobStore):
    # Files are named <ms epoch><ext> and never deleted
    def __init__(self, directory, url_prefix="/uploads"):
        self.directory = directory
        self.url_prefix = url_prefix.rstrip("/")
        os.makedirs(directory, exist_ok=True)

    def _timestamp(self):
        return int(time.time() * 1000)

    def save(self, upload):
        ext = extension_of(upload.filename)
        stamp = self._timestamp()
        while True:
            name = f"{stamp}{ext}"
            path = os.path.join(self.directory, name)
            try:
                f = open(path, "xb")
            except FileExistsError:
                stamp += 1
                continue
            break
        try:
            with f:
                upload.save(f)
        except BaseException:
            os.unlink(path)
            raise
        return f"{self.url_prefix}/{name}"


class CloudinaryBlobStore(BlobStore):
    def __init__(self, cloud_name, api_key, api_secret):
        cloudinary.config(
            cloud_name = cloud_name,
            api_key = api_key,
            api_secret = api_secret,
            secure=True
        )

    def save(self, upload):
        upload_result = cloudinary.uploader.upload(upload)
        return upload_result['secure_url']
