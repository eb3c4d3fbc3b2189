from taskflow.database import create_tables, get_session
from taskflow.models import User
from taskflow.models.task import utcnow

# The identity the mocked login screen hands out
DEMO_NAME = "Adan Food"
DEMO_EMAIL = "adan.food@gmail.com"
DEMO_AVATAR = "https://ui-avatars.com/api/?name=Adan+Food&background=2563eb&color=fff"

# Create tables if not exist
create_tables()

with get_session() as db:
    existing_user = db.query(User).filter(User.email == DEMO_EMAIL).first()
    if existing_user:
        existing_user.last_login = utcnow()
        db.commit()
        print("User already exists, login time refreshed")
    else:
        db.add(User(name=DEMO_NAME, email=DEMO_EMAIL, avatar=DEMO_AVATAR))
        db.commit()
        print(f"Demo user created: {DEMO_EMAIL}")
