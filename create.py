# create.py: set up tables for a fresh install (use `flask db upgrade` once migrations exist)
import sys
from jobboard import create_app
from jobboard.extensions import db
from jobboard.models.careers import JobType


def main(type_names):
    app = create_app()
    with app.app_context():
        db.create_all()
        print("Tables created.")

        # Optional starter job types: python create.py "Full-time" "Contract"
        for name in type_names:
            name = name.strip()
            if not name:
                continue
            if JobType.query.filter_by(name=name).first():
                print(f"Job type {name!r} already exists.")
                continue
            db.session.add(JobType(name=name))
            print(f"Job type {name!r} added.")
        db.session.commit()

if __name__ == "__main__":
    main(sys.argv[1:])
