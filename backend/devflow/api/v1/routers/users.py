from fastapi import APIRouter
from devflow.core.errors import NotFoundError
from devflow.models.user import User
from devflow.schemas.user import CreateUserIn, UserOut

router = APIRouter(prefix="/users", tags=["users"])

def _user_out(u: User) -> dict:
    return UserOut(
        id=str(u.id),
        externalId=u.external_id,
        name=u.name,
        username=u.username,
        email=u.email,
        picture=u.picture,
        reputation=u.reputation,
        joinedAt=u.joined_at.isoformat(),
    ).model_dump()

@router.post("", response_model=dict)
async def create_user(body: CreateUserIn):
    """
    Register a user coming from the external sign-in provider.

    Returns:
        dict: Success response with the user, or error response:
            - EXTERNAL_ID_EXISTS: A user with this external id already exists
            - USERNAME_EXISTS: Username already taken
    """
    if await User.get_or_none(external_id=body.externalId):
        return {"success": False, "error": {"code": "EXTERNAL_ID_EXISTS", "message": "User already registered"}}
    if await User.get_or_none(username=body.username):
        return {"success": False, "error": {"code": "USERNAME_EXISTS", "message": "Username already exists"}}
    u = await User.create(
        external_id=body.externalId,
        name=body.name,
        username=body.username,
        email=(body.email or None),
        picture=body.picture,
    )
    return {"success": True, "data": _user_out(u)}

@router.get("/{external_id}", response_model=dict)
async def get_user(external_id: str):
    """
    Look up a user by external identity key.

    Raises:
        NotFoundError (404): If no user has this external id
    """
    u = await User.get_or_none(external_id=external_id)
    if not u:
        raise NotFoundError("User", external_id)
    return {"success": True, "data": _user_out(u)}
