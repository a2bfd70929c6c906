# In-memory user registry served by the gateway's /users routes
import logging
import threading
import uuid
from dataclasses import dataclass

import constants
from errors import LockFailureError


@dataclass(frozen=True)
class User:
    id: uuid.UUID
    username: str

    def to_dict(self):
        return {'id': str(self.id), 'username': self.username}


class UserRegistry:
    def __init__(self, lock_timeout=constants.DEFAULT_LOCK_TIMEOUT):
        self._lock = threading.Lock()
        self._lock_timeout = lock_timeout
        self._users = []

    def _acquire(self):
        if not self._lock.acquire(timeout=self._lock_timeout):
            logging.error("Could not acquire the user registry lock")
            raise LockFailureError("user registry is locked")

    def add(self, username):
        user = User(id=uuid.uuid4(), username=username)
        self._acquire()
        try:
            self._users.append(user)
        finally:
            self._lock.release()
        logging.debug(f"Registered user {username} ({user.id})")
        return user

    def list(self):
        self._acquire()
        try:
            return list(self._users)
        finally:
            self._lock.release()
