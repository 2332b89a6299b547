from flask import Blueprint, Flask, current_app, jsonify, render_template, request, send_from_directory # web framework
from config import Config
from models import db, new_post  # Import db and the post record builder from models.py
from repository import (
    DuplicateSlugError,
    InMemoryPostRepository,
    JsonFilePostRepository,
    RepositoryError,
    SqlPostRepository,
)
from storage import CloudinaryBlobStore, DiskBlobStore
import sys

# All routes live on one blueprint so create_app can build as many apps as tests need
bp = Blueprint('blog', __name__)


def posts():
    return current_app.extensions['post_repository']


def blobs():
    return current_app.extensions['blob_store']


# Serves the upload form
@bp.route("/", methods=['GET'])
def index():
    return render_template("index.html")


# Saves the image, then appends the post (CREATE operation)
@bp.route("/upload", methods=['POST'])
def upload():
    if 'image' not in request.files or not request.files['image'].filename:
        return jsonify(error="No file uploaded"), 400
    title = request.form.get('title', '')
    content = request.form.get('content', '')
    try:
        image_url = blobs().save(request.files['image'])
        blog = posts().append(new_post(title, content, image_url))
    except DuplicateSlugError:
        return jsonify(error="Blog with this title already exists"), 400
    except Exception as e:
        print(f"✗ Error during upload: {e}")
        return jsonify(error="Internal Server Error"), 500
    print(f"✓ Created post: {blog['slug']}")
    # Return the newly created blog data
    return jsonify(blog)


# Every post as a JSON array, storage order
@bp.route("/blog-json", methods=['GET'])
def blog_json():
    try:
        blogs = posts().load()
    except RepositoryError as e:
        print(f"✗ Error parsing blog data: {e}")
        return jsonify(error="Error parsing blog data"), 500
    except OSError as e:
        print(f"✗ Error reading blog data: {e}")
        return jsonify(error="Unable to read blog data"), 500
    return jsonify(blogs)


# Displays all posts (READ operation), insertion order is display order
@bp.route("/blog", methods=['GET'])
def blog_list():
    try:
        blogs = posts().load()
        return render_template("blog.html", blogs=blogs)
    except Exception as e:
        print(f"✗ Error in blog route: {e}")
        return "Error loading blog posts", 500


# path converter: a slug keeps any "/" that was in the title
@bp.route("/blog/<path:slug>", methods=['GET'])
def show_post(slug):
    try:
        blog = posts().find_by_slug(slug)
        if blog is None:
            return "Blog not found", 404
        return render_template(
            "post.html",
            blog=blog,
            raw_content=current_app.config['RENDER_RAW_CONTENT'],
        )
    except Exception as e:
        print(f"✗ Error displaying post {slug}: {e}")
        return "Error displaying blog post", 500


@bp.route("/uploads/<path:filename>", methods=['GET'])
def uploaded_file(filename):
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)


@bp.route("/health")
def health():
    try:
        count = len(posts().load())
    except Exception as e:
        return {"status": "unhealthy", "error": str(e)}, 500
    return {"status": "healthy", "posts": count}, 200


def build_repository(app):
    kind = app.config['POST_STORE']
    if kind == 'json':
        return JsonFilePostRepository(app.config['BLOG_DATA_PATH'])
    if kind == 'memory':
        return InMemoryPostRepository()
    if kind == 'sql':
        # Initialize db with app
        db.init_app(app)
        with app.app_context():
            db.create_all()
        return SqlPostRepository()
    raise ValueError(f"unknown POST_STORE {kind!r}")


def build_blob_store(app):
    kind = app.config['BLOB_STORE']
    if kind == 'disk':
        return DiskBlobStore(app.config['UPLOAD_FOLDER'])
    if kind == 'cloudinary':
        return CloudinaryBlobStore(
            app.config['CLOUDINARY_CLOUD_NAME'],
            app.config['CLOUDINARY_API_KEY'],
            app.config['CLOUDINARY_API_SECRET'],
        )
    raise ValueError(f"unknown BLOB_STORE {kind!r}")


def create_app(config=None, repository=None, blob_store=None):
    """Build the Flask app. repository and blob_store replace the configured stores when given."""
    app = Flask(__name__)
    app.config.from_object(Config)
    if config:
        app.config.update(config)
    # keep title, content, imageUrl, slug, date in that order
    app.json.sort_keys = False

    app.extensions['post_repository'] = repository if repository is not None else build_repository(app)
    app.extensions['blob_store'] = blob_store if blob_store is not None else build_blob_store(app)
    app.register_blueprint(bp)
    return app


# Test storage on startup
def check_storage(app):
    try:
        with app.app_context():
            count = len(app.extensions['post_repository'].load())
        print(f"✓ Storage ready ({count} posts)")
        return True
    except Exception as e:
        print(f"✗ Storage check failed: {e}")
        return False


# Run the app
if __name__ == '__main__':
    app = create_app()
    if check_storage(app):
        print(f"Server is running on http://localhost:{app.config['PORT']}")
        app.run(host=app.config['HOST'], port=app.config['PORT'], debug=app.config['DEBUG'])
    else:
        print("Failed to start app.")
        sys.exit(1)  # non-zero exit so the caller sees the failed start
