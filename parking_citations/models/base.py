import parking_citations.db.database as db


class Base(db.DeclarativeBase):
    __abstract__ = True

    @classmethod
    def create(cls, **kwargs):
        """Insert a row and commit it."""
        record = cls(**kwargs)

        cls.query.session.add(record)
        cls.query.session.commit()

        return record

    @classmethod
    def get_by(cls, **kwargs):
        assert kwargs, 'kwargs can\'t be empty'
        return cls.query.filter_by(**kwargs).first()
