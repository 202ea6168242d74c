from datetime import datetime, timedelta, timezone
from jose import jwt
from homeaway.core.config import settings

# 1. Define the identity-provider subject to impersonate
TEST_SUBJECT_ID = "user_2test0000000000000000000"

# 2. Create the payload with the subject and expiration
payload = {
    "sub": TEST_SUBJECT_ID,
    "exp": datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
}

# 3. Sign the token using your project's SECRET_KEY (HS256 tokens are verified against it)
token = jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

print("\n--- YOUR TEST JWT TOKEN ---")
print(token)
print("---------------------------\n")
