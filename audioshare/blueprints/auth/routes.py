# audioshare/blueprints/auth/routes.py
from urllib.parse import urlsplit

from flask import render_template, request, redirect, url_for, flash, current_app
from flask_login import login_user, logout_user, login_required, current_user
from flask_babel import gettext as _
from ...extensions import db
from ...models.user import User
from . import auth_bp
from .forms import RegisterForm, LoginForm

# -----------------
# Utilities
# -----------------

def _redirect_next(default_endpoint: str):
    nxt = request.args.get("next") or request.form.get("next")
    # only same-site relative paths
    if nxt and nxt.startswith("/") and not urlsplit(nxt).netloc and not nxt.startswith("//"):
        return nxt
    return url_for(default_endpoint)

# -----------------
# Register
# -----------------

@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    if current_user.is_authenticated:
        return redirect(url_for('main.dashboard'))

    form = RegisterForm()
    if form.validate_on_submit():
        user = User(
            name=form.name.data.strip(),
            email=form.email.data.strip().lower(),
        )
        user.set_password(form.password.data)
        db.session.add(user)
        db.session.commit()
        current_app.logger.info(f"[auth] registered user {user.id}")
        flash(_('Account created. You can now log in.'), 'success')
        return redirect(url_for('auth.login'))

    return render_template('auth/register.html', form=form)


# -----------------
# Login / Logout
# -----------------

@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    if current_user.is_authenticated:
        return redirect(url_for('main.dashboard'))

    form = LoginForm()
    if form.validate_on_submit():
        email = form.email.data.strip().lower()
        user = User.query.filter_by(email=email).first()
        if not user or not user.check_password(form.password.data):
            flash(_('Invalid email or password.'), 'danger')
            return render_template('auth/login.html', form=form), 401

        login_user(user, remember=bool(form.remember.data))
        user.mark_login()
        db.session.commit()
        return redirect(_redirect_next('main.dashboard'))

    # Preserve next param
    if request.method == 'GET':
        form.next.data = request.args.get('next', '')
    return render_template('auth/login.html', form=form)


@auth_bp.route('/logout')
@login_required
def logout():
    logout_user()
    flash(_('You have been logged out.'), 'info')
    return redirect(url_for('auth.login'))
