"""Create all tables (and optionally a demo project) for a quick dev setup (NOT for production).

Only meaningful with FEEDBACK_REPO_BACKEND=sqlalchemy; the Supabase schema is
managed in Supabase itself.
"""
from __future__ import annotations

import argparse
import uuid

from feedboard import create_app
from feedboard.db.base import Base
from feedboard.db.models.feedback import BoardModel, PostModel, ProjectModel
from feedboard.db.session import db


def seed_demo(slug: str) -> None:
    session = db.Session()
    if session.query(ProjectModel).filter_by(slug=slug).first():
        print(f"Project {slug!r} already exists.")
        return
    project = ProjectModel(id=str(uuid.uuid4()), name=slug.replace("-", " ").title(), slug=slug)
    board = BoardModel(id=str(uuid.uuid4()), project_id=project.id)
    session.add_all([project, board])
    session.flush()
    session.add(PostModel(id=str(uuid.uuid4()), board_id=board.id, title="Dark mode", status="planned"))
    session.commit()
    print(f"Seeded demo project {slug!r}.")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", metavar="SLUG", help="also create a demo project with this slug")
    args = parser.parse_args()

    app = create_app()
    with app.app_context():
        assert db.engine is not None, "set FEEDBACK_REPO_BACKEND=sqlalchemy"
        Base.metadata.create_all(db.engine)
        print("Tables created.")
        if args.seed:
            seed_demo(args.seed)


if __name__ == "__main__":
    main()
