# scripts/add_user.py
"""Create a landlord account, or reset its password if it exists.

    python scripts/add_user.py owner@example.com 'S3cret!' "Flat Owner"
"""
import argparse

from dotenv import load_dotenv

from flatdesk import create_app
from flatdesk.extensions import db
from flatdesk.models import User


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("name", nargs="?", default="Landlord")
    args = parser.parse_args()

    load_dotenv()
    app = create_app()
    with app.app_context():
        email = args.email.strip().lower()
        u = User.query.filter_by(email=email).first()
        if not u:
            u = User(email=email, name=args.name)
            db.session.add(u)
        u.set_password(args.password)
        db.session.commit()
        print("Upserted:", u.id, u.email)


if __name__ == "__main__":
    main()
