# Access environment variables
import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


# Defaults reproduce the fixed setup: port 3000, data/blogs.json, uploads/ on disk
class Config:
    BLOG_DATA_PATH = os.environ.get('BLOG_DATA_PATH', os.path.join(BASE_DIR, 'data', 'blogs.json'))
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER', os.path.join(BASE_DIR, 'uploads'))

    # json | sql | memory
    POST_STORE = os.environ.get('POST_STORE', 'json')
    # disk | cloudinary
    BLOB_STORE = os.environ.get('BLOB_STORE', 'disk')

    # Only used by the sql post store
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///site.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False  # Avoids a warning

    CLOUDINARY_CLOUD_NAME = os.environ.get("cloudinary_cloud_name")
    CLOUDINARY_API_KEY = os.environ.get("cloudinary_api_key")
    CLOUDINARY_API_SECRET = os.environ.get("cloudinary_api_secret")

    # Post content is authored as HTML and rendered unescaped unless this is off
    RENDER_RAW_CONTENT = _flag('RENDER_RAW_CONTENT', True)

    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
    DEBUG = _flag('DEBUG', False)
