"""
REST API over the SchoolDesk state layer using FastAPI.

The adapter adds no rules of its own: blank-input rejections come from the
stores' ``None`` results and are mapped to 400.
"""

import datetime as dt
import logging
from typing import Optional, Dict, Any, List

from pydantic import BaseModel, Field

from fastapi import FastAPI, HTTPException, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..core.entities import AttendanceRecord, attendance_key, utc_now
from ..core.exceptions import SchoolDeskException

logger = logging.getLogger(__name__)


# Pydantic models for API
class LoginRequest(BaseModel):
    username: str = Field(..., max_length=100)
    password: str = Field(..., max_length=200)


class AnnouncementCreate(BaseModel):
    title: str = Field(..., max_length=200)
    body: str = Field(..., max_length=5000)
    publish_at: Optional[dt.datetime] = None
    expires_at: Optional[dt.datetime] = None
    created_by: Optional[str] = Field(None, max_length=100)


class ScheduleCreate(BaseModel):
    title: str = Field(..., max_length=200)
    date: str = Field(..., max_length=10)
    kind: str
    class_name: Optional[str] = Field(None, max_length=50)
    subject: Optional[str] = Field(None, max_length=100)
    created_by: Optional[str] = Field(None, max_length=100)


class AttendanceToggle(BaseModel):
    date: dt.date
    class_name: str = Field(..., min_length=1, max_length=50)
    student_id: str = Field(..., min_length=1, max_length=50)


class LoginResponse(BaseModel):
    success: bool
    user: Dict[str, Any]


class SchoolDeskRestAPI:
    """REST API implementation for a :class:`SchoolDeskPlatform`."""

    def __init__(self, platform):
        self._platform = platform

        # Create FastAPI app
        self.app = FastAPI(
            title="SchoolDesk API",
            description="Local state layer for the SchoolDesk school-management client",
            version=__version__,
            docs_url="/docs",
            redoc_url="/redoc"
        )

        # Add CORS middleware
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        self._setup_error_handlers()
        self._setup_routes()

    def _author(self, requested: Optional[str], fallback: str) -> str:
        """Explicit author, else the logged-in user's display name, else ``fallback``."""
        if requested and requested.strip():
            return requested.strip()
        user = self._platform.session.current_user
        return user.display_name if user else fallback

    def _setup_error_handlers(self):
        @self.app.exception_handler(SchoolDeskException)
        async def schooldesk_error(request: Request, exc: SchoolDeskException):
            logger.error("Request %s %s failed: %s", request.method, request.url.path, exc.message)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": f"Internal error: {exc.message}"},
            )

    def _setup_routes(self):
        """Setup API routes."""
        platform = self._platform

        @self.app.get("/", response_model=Dict[str, str])
        async def root():
            """Root endpoint."""
            return {
                "message": "SchoolDesk API",
                "version": __version__,
                "docs": "/docs"
            }

        @self.app.get("/health", response_model=Dict[str, str])
        async def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": utc_now().isoformat()}

        # Session endpoints
        @self.app.post("/auth/login", response_model=LoginResponse)
        async def login(credentials: LoginRequest):
            """Log in with username and password."""
            if not await platform.session.login(credentials.username, credentials.password):
                raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                                    detail="Invalid username or password")
            return {"success": True, "user": platform.session.current_user.to_dict()}

        @self.app.get("/auth/session")
        async def current_session():
            """Return the logged-in user."""
            user = platform.session.current_user
            if user is None:
                raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not logged in")
            return user.to_dict()

        @self.app.post("/auth/logout")
        async def logout():
            """End the current session."""
            platform.session.logout()
            return {"success": True}

        @self.app.get("/accounts", response_model=List[Dict[str, Any]])
        async def list_accounts():
            """List accounts without passwords."""
            return [account.to_dict() for account in platform.credentials.accounts()]

        # Announcement endpoints
        @self.app.get("/announcements", response_model=List[Dict[str, Any]])
        async def list_announcements(visible_only: bool = False, now: Optional[dt.datetime] = None):
            """List announcements, newest first."""
            if visible_only:
                items = platform.announcements.visible(now)
            else:
                items = platform.announcements.announcements
            return [a.to_dict() for a in items]

        @self.app.post("/announcements", status_code=status.HTTP_201_CREATED)
        async def create_announcement(data: AnnouncementCreate):
            """Publish an announcement."""
            announcement = platform.announcements.create(
                data.title,
                data.body,
                created_by=self._author(data.created_by, "Admin"),
                publish_at=data.publish_at,
                expires_at=data.expires_at,
            )
            if announcement is None:
                raise HTTPException(status_code=400, detail="Title and body are required")
            return announcement.to_dict()

        @self.app.delete("/announcements/{announcement_id}", status_code=status.HTTP_204_NO_CONTENT)
        async def delete_announcement(announcement_id: str):
            """Delete an announcement. Unknown ids are ignored."""
            platform.announcements.remove(announcement_id)
            return Response(status_code=status.HTTP_204_NO_CONTENT)

        # Schedule endpoints
        @self.app.get("/schedule", response_model=List[Dict[str, Any]])
        async def list_schedule(upcoming: bool = False, today: Optional[dt.date] = None,
                                limit: Optional[int] = None):
            """List schedule entries, or only upcoming ones sorted by date."""
            if upcoming:
                items = platform.schedule.upcoming(today, limit)
            else:
                items = platform.schedule.items
            return [s.to_dict() for s in items]

        @self.app.post("/schedule", status_code=status.HTTP_201_CREATED)
        async def create_schedule_item(data: ScheduleCreate):
            """Add an assignment, exam or meeting."""
            item = platform.schedule.create(
                data.title,
                data.date,
                data.kind,
                created_by=self._author(data.created_by, "Guru"),
                class_name=data.class_name,
                subject=data.subject,
            )
            if item is None:
                raise HTTPException(status_code=400, detail="Title, a valid date and kind are required")
            return item.to_dict()

        # Attendance endpoints
        @self.app.post("/attendance/toggle")
        async def toggle_attendance(data: AttendanceToggle):
            """Flip one student's presence."""
            record = platform.attendance.toggle(data.date, data.class_name, data.student_id)
            return record.to_dict()

        @self.app.get("/attendance/{day}/{class_name}")
        async def get_attendance(day: dt.date, class_name: str):
            """Presence record for a class; empty when nobody is marked."""
            record = platform.attendance.find(day, class_name)
            if record is None:
                record = AttendanceRecord(id=attendance_key(day, class_name), date=day, class_name=class_name)
            return record.to_dict()

        @self.app.get("/attendance/{day}", response_model=List[Dict[str, Any]])
        async def attendance_summary(day: dt.date):
            """Present/total counts for each class."""
            return [row.to_dict() for row in platform.attendance.summary(day, platform.roster)]

        # Roster endpoints
        @self.app.get("/students", response_model=List[Dict[str, Any]])
        async def list_students(class_name: Optional[str] = None):
            """List roster students, optionally for one class."""
            return [s.to_dict() for s in platform.roster.students(class_name)]
