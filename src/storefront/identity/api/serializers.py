"""JSON shape of a user profile."""


def user_data(user) -> dict:
    return {
        "id": str(user.id),
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "full_name": user.full_name(),
        "display_name": user.display_name(),
        "role": user.role,
        "phone": user.phone,
        "address": user.address,
        "city": user.city,
        "state": user.state,
        "zip_code": user.zip_code,
        "country": user.country,
        "full_address": user.full_address(),
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }
