import sys
from datetime import datetime
from zoneinfo import ZoneInfo

from flask import g, redirect, render_template, request, url_for
from marshmallow import ValidationError
from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db, limiter
from app.models.post import DEFAULT_IMAGE, Post, post_form_schema
from app.posts import bp
from app.uploads import accepts_image, discard_image, save_image
from app.views import database_error, page_title, post_not_found

REQUIRED_FIELDS_ERROR = 'Title and content are required'


def render_create_form(post, error=None, status_code=200):
    return render_template('create.html', title=page_title('Create a new blog post'),
                           error=error, post=post), status_code


def render_edit_form(post, error=None, status_code=200):
    return render_template('edit.html', title=page_title('Edit blog post'),
                           error=error, post=post), status_code


@bp.route('/new', methods=['GET'])
def new_post():
    return render_create_form({})


@bp.route('/<int:post_id>', methods=['GET'])
def show_post(post_id):
    try:
        post = db.session.get(Post, post_id)
    except SQLAlchemyError as e:
        return database_error(e)

    if post is None:
        return post_not_found()
    return render_template('post.html', title=page_title(post.title), post=post)


@bp.route('', methods=['POST'])
@limiter.limit('10/minute')
@accepts_image('create')
def create_post():
    echo = {'title': request.form.get('title'), 'content': request.form.get('content')}
    try:
        data = post_form_schema.load(request.form)
    except ValidationError:
        # Nothing has been written yet, g.image is still only in memory
        return render_create_form(echo, REQUIRED_FIELDS_ERROR, 400)

    image = save_image(g.image) if g.image else DEFAULT_IMAGE
    new_post = Post(title=data['title'], content=data['content'], image=image,
                    created_at=datetime.now(ZoneInfo("UTC")))
    try:
        db.session.add(new_post)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        print(f'Error creating post: {e}', file=sys.stderr)
        discard_image(image)
        return render_create_form(echo, 'Database error while creating post', 500)

    return redirect(url_for('posts.show_post', post_id=new_post.id))


@bp.route('/<int:post_id>/edit', methods=['GET'])
def edit_post(post_id):
    try:
        post = db.session.get(Post, post_id)
    except SQLAlchemyError as e:
        return database_error(e)

    if post is None:
        return post_not_found()
    return render_template('edit.html', title=page_title(f'Edit {post.title}'), post=post)


@bp.route('/<int:post_id>', methods=['PUT'])
@limiter.limit('10/minute')
@accepts_image('edit')
def update_post(post_id):
    echo = {'id': post_id, 'title': request.form.get('title'), 'content': request.form.get('content')}
    try:
        existing_post = db.session.get(Post, post_id)
    except SQLAlchemyError as e:
        db.session.rollback()
        print(f'Error looking up post {post_id}: {e}', file=sys.stderr)
        return render_edit_form(echo, 'Database error while updating post', 500)

    if existing_post is None:
        return post_not_found()

    try:
        data = post_form_schema.load(request.form)
    except ValidationError:
        return render_edit_form(echo, REQUIRED_FIELDS_ERROR, 400)

    # A new upload wins over removeImage, which wins over the current image
    previous_image = existing_post.image
    if g.image:
        image = save_image(g.image)
    elif request.form.get('removeImage') == 'true':
        image = DEFAULT_IMAGE
    else:
        image = previous_image

    try:
        # Same transaction as the lookup, a concurrent delete shows up as zero rows
        result = db.session.execute(
            update(Post).where(Post.id == post_id).values(
                title=data['title'], image=image, content=data['content'])
        )
        if result.rowcount == 0:
            db.session.rollback()
            if g.image:
                discard_image(image)
            return post_not_found()
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        print(f'Error updating post {post_id}: {e}', file=sys.stderr)
        if g.image:
            discard_image(image)
        return render_edit_form(echo, 'Database error while updating post', 500)

    if image != previous_image:
        discard_image(previous_image)
    return redirect(url_for('posts.show_post', post_id=post_id))


@bp.route('/<int:post_id>', methods=['DELETE'])
@limiter.limit('10/minute')
def delete_post(post_id):
    try:
        post = db.session.get(Post, post_id)
        if post is None:
            return post_not_found()
        image = post.image
        # A concurrent delete after the lookup shows up as zero rows
        result = db.session.execute(delete(Post).where(Post.id == post_id))
        if result.rowcount == 0:
            db.session.rollback()
            return post_not_found()
        db.session.commit()
    except SQLAlchemyError as e:
        return database_error(e)

    discard_image(image)
    return redirect(url_for('main.index'))
