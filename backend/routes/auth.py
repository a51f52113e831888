# backend/routes/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session
from utils.hashing import get_password_hash, verify_password
from utils.tokenJWT import token_for_user, get_current_user
from utils.audit import write_log, client_ip
from utils import user_store
from models.users import User
from schemas import user as schemas
from database import get_db

router = APIRouter(tags=["Auth"])
logger = logging.getLogger(__name__)

# Register a new user
@router.post("/register", response_model=schemas.RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(payload: schemas.UserCreate, request: Request, db: Session = Depends(get_db)):
    if not payload.name or not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail="All fields are required")

    try:
        hashed_password = get_password_hash(payload.password)
    except ValueError:
        logger.exception("Password hashing failed for %s", payload.email)
        raise HTTPException(status_code=500, detail="Error hashing password")

    # The unique constraint on users.email decides whether the account exists
    try:
        user_id = user_store.create_user(db, payload.name, payload.email, hashed_password, phone=payload.phone)
    except user_store.DuplicateEmailError:
        write_log(
            db,
            user_id=None,
            action="REGISTER",
            resource="auth",
            status="FAIL",
            ip=client_ip(request),
            meta={"email": payload.email, "reason": "Email exists"},
        )
        raise HTTPException(status_code=400, detail="User already exists")
    except user_store.StorageError:
        raise HTTPException(status_code=500, detail="DB error")

    new_user = db.get(User, user_id)

    # Log successful registration event
    write_log(
        db,
        user_id=user_id,
        action="REGISTER",
        resource="auth",
        status="SUCCESS",
        ip=client_ip(request),
        meta={"email": new_user.email},
    )

    return {"message": "User registered", "userId": user_id, "user": new_user}


# Authenticate user and issue JWT token
@router.post("/login", response_model=schemas.LoginResponse)
def login(payload: schemas.UserLogin, request: Request, db: Session = Depends(get_db)):
    try:
        db_user = user_store.find_user_by_email(db, payload.email)
    except user_store.StorageError:
        raise HTTPException(status_code=500, detail="DB error")

    # Validate credentials and log failure on error
    if not db_user or not verify_password(payload.password, db_user.password):
        write_log(db, user_id=(db_user.id if db_user else None), action="LOGIN", resource="auth",
                  status="FAIL", ip=client_ip(request), meta={"email": payload.email})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    token = token_for_user(db_user)

    write_log(db, user_id=db_user.id, action="LOGIN", resource="auth",
              status="SUCCESS", ip=client_ip(request), meta={"email": db_user.email})

    return {"message": "Login successful", "token": token, "user": db_user}


# Retrieve current authenticated user details
@router.get("/me", response_model=schemas.UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
