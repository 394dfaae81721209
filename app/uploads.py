import os
import random
import re
import sys
import time
from functools import wraps

from flask import current_app, g, request
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from app.errors import UploadError
from app.models.post import DEFAULT_IMAGE

IMAGE_FIELD = 'image'
UPLOAD_PREFIX = 'uploads/'
# Case sensitive, 'photo.JPG' is rejected
ALLOWED_IMAGE = re.compile(r'\.(jpg|jpeg|png|gif)$')


def file_size(file: FileStorage) -> int:
    stream = file.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def check_image(file: FileStorage, view: str) -> None:
    """
    Validates a single uploaded image against the allowed extensions and size limit.

    :param file: The uploaded file.
    :param view: The form to report errors on.
    :raises UploadError: If the file is not an allowed image or is too large.
    """
    if not ALLOWED_IMAGE.search(file.filename):
        raise UploadError('Only image files are allowed!', view)

    if file_size(file) > current_app.config['MAX_IMAGE_SIZE']:
        raise UploadError('File size exceeds the 5MB limit.', view)


def accepts_image(view: str):
    """
    Checks the request's files before the route runs. The accepted image, or None,
    is left on g.image and is only written to disk by save_image.
    """
    def wrapper(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            # Browsers send an empty part when no file was chosen
            uploads = [(field, file) for field, file in request.files.items(multi=True)
                       if file.filename]

            if len(uploads) > 1 or any(field != IMAGE_FIELD for field, _ in uploads):
                raise UploadError('Unexpected field', view)

            g.image = None
            if uploads:
                image = uploads[0][1]
                check_image(image, view)
                g.image = image
            return f(*args, **kwargs)
        return decorated_function
    return wrapper


def generate_image_name(original_filename: str) -> str:
    extension = os.path.splitext(original_filename)[1]
    return f'blog-{int(time.time() * 1000)}-{random.randint(0, 10**9)}{extension}'


def save_image(file: FileStorage) -> str:
    """
    Saves an accepted upload under the uploads folder with a generated name.

    :param file: The upload accepted by accepts_image.
    :return: The image path to store on the post, e.g. 'uploads/blog-1700000000000-42.png'.
    """
    upload_dir = current_app.config['UPLOAD_FOLDER']

    # Ensure the directory exists
    os.makedirs(upload_dir, exist_ok=True)

    filename = generate_image_name(file.filename)
    file.save(os.path.join(upload_dir, filename))
    return UPLOAD_PREFIX + filename


def delete_image(image: str) -> None:
    """
    Deletes an uploaded image from the uploads folder.

    :param image: The image path stored on the post.
    :raises FileNotFoundError: If the image file does not exist.
    """
    upload_dir = current_app.config['UPLOAD_FOLDER']
    file_path = os.path.join(upload_dir, secure_filename(image[len(UPLOAD_PREFIX):]))

    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"Image '{image}' not found.")

    os.remove(file_path)


def discard_image(image: str) -> None:
    # The default image and anything outside the uploads folder are left alone
    if image == DEFAULT_IMAGE or not image.startswith(UPLOAD_PREFIX):
        return
    try:
        delete_image(image)
    except OSError as e:
        print(f"Unable to delete image '{image}': {e}", file=sys.stderr)
