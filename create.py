# create.py - create an account from the shell
from getpass import getpass
from audioshare import create_app
from audioshare.extensions import db
from audioshare.models.user import User


def main():
    app = create_app()
    with app.app_context():
        db.create_all()
        email = input("Email: ").strip().lower()
        name = input("Display name: ").strip()
        password = getpass("Password: ")

        # Check existing
        if User.query.filter_by(email=email).first():
            print("User with that email already exists.")
            return

        user = User(name=name, email=email)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        print(f"User {email} created with id {user.id}.")

if __name__ == "__main__":
    main()
