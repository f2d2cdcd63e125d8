import sys
from delivery_quote.core.security import hash_password, verify_password


def build_admin_hash(password: str) -> str | None:
    try:
        hashed_password = hash_password(password)
        if not verify_password(password, hashed_password):
            print("Error: generated hash does not verify")
            return None
        return hashed_password

    except Exception as e:
        print(f"Error hashing admin password: {str(e)}")
        return None


def main():
    if len(sys.argv) < 2:
        print("Usage: python hash_admin_password.py <password>")
        sys.exit(1)

    password = sys.argv[1]

    if not password:
        print("Error: password cannot be empty")
        sys.exit(1)

    hashed_password = build_admin_hash(password)
    if hashed_password is None:
        sys.exit(1)

    print("Add this line to your .env file:")
    print(f"ADMIN_PASSWORD_HASH='{hashed_password}'")
    sys.exit(0)


if __name__ == "__main__":
    main()
