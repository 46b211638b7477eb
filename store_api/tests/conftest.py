import pytest
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from werkzeug.security import generate_password_hash
from store_api.core.database import build_engine, get_db
from store_api.models.database import Base, Category, Product, User

TEST_PASSWORD = "secret123"


@pytest.fixture
def test_engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'test_store.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def test_db(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory):
    from main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def category(test_db):
    category = Category(name="Home Office", description="Desks, lamps and accessories")
    test_db.add(category)
    test_db.commit()
    test_db.refresh(category)
    return category


@pytest.fixture
def products(test_db, category):
    """Product A: 10.00 with 10 in stock, product B: 25.00 with 5 in stock"""
    items = [
        Product(
            name="Desk Lamp",
            description="Adjustable LED desk lamp",
            price=Decimal("10.00"),
            stock=10,
            category_id=category.id,
        ),
        Product(
            name="Wireless Mouse",
            description="Ergonomic wireless mouse",
            price=Decimal("25.00"),
            stock=5,
            category_id=category.id,
        ),
    ]
    test_db.add_all(items)
    test_db.commit()
    for item in items:
        test_db.refresh(item)
    return items


@pytest.fixture
def user(test_db):
    user = User(
        first_name="John",
        last_name="Doe",
        email="john.doe@example.com",
        password_hash=generate_password_hash(TEST_PASSWORD),
        phone="+1-555-0101",
        address="123 Main St, New York, NY 10001",
    )
    test_db.add(user)
    test_db.commit()
    test_db.refresh(user)
    return user
