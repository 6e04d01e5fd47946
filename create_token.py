import sys

from focus_orbit_api.app.core.security import create_access_token

# identity (principal) из аргумента; срок действия 365 дней (секунды)
identity = sys.argv[1] if len(sys.argv) > 1 else "admin"
token = create_access_token({"sub": identity}, expires_delta=365*24*60*60)
print(token)
