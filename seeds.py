"""
seeds.py
--------
Start a local development server preloaded with demo data.

The registry and placement store are in-memory only, so demo accounts are
created on every start.

Usage:
    $ python seeds.py
"""
from internship_portal import create_app
from internship_portal.seed import DEMO_PASSWORD, DEMO_USERS


def main():
    app = create_app({"SEED_DEMO_DATA": True})

    print("✅ Seed complete.")
    for u in DEMO_USERS:
        print(f"🔑 {u['role']:<22} {u['user_id']} / {DEMO_PASSWORD}")

    app.run(debug=True)


if __name__ == "__main__":
    main()
