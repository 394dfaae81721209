from flask import redirect, render_template, request, url_for
from marshmallow import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import limiter
from app.main import bp
from app.models.contact import contact_schema
from app.models.post import Post
from app.views import SITE_NAME, database_error, page_title


@bp.route('/')
def index():
    """
        Lists every post, newest first
    """
    try:
        posts = Post.query.order_by(Post.created_at.desc()).all()
    except SQLAlchemyError as e:
        return database_error(e)
    return render_template('index.html', posts=posts,
                           title=f'{SITE_NAME} - Discover the Beauty of Malawi')


@bp.route('/create')
def create():
    return redirect(url_for('posts.new_post'))


@bp.route('/about')
def about():
    return render_template('about.html', title=page_title('About Us'))


@bp.route('/contact', methods=['GET', 'POST'])
@limiter.limit('10/minute', methods=['POST'])
def contact():
    title = page_title('Contact Us')
    if request.method == 'GET':
        return render_template('contact.html', title=title)
    elif request.method == 'POST':
        form_data = {
            'name': request.form.get('name'),
            'email': request.form.get('email'),
            'message': request.form.get('message')
        }
        try:
            contact_schema.load(request.form)
        except ValidationError:
            return render_template('contact.html', title=title, error='All fields are required',
                                   form_data=form_data), 400

        # The message is acknowledged but not stored or forwarded
        return render_template('contact.html', title=title,
                               success='Thank you for your message! We will get back to you soon.')
