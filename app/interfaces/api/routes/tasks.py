"""Endpoints for tasks and their comments."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.application.use_cases.comments import add_comment, list_comments
from app.application.use_cases.tasks import (
    create_task,
    delete_task,
    get_task,
    list_tasks,
    update_task,
)
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.realtime import EventDispatcher
from app.interfaces.api.dependencies import get_current_user, get_event_dispatcher
from app.interfaces.api.routes_helpers import http_error_from
from app.interfaces.api.schemas import (
    CommentCreate,
    CommentRead,
    SuccessResponse,
    TaskCreate,
    TaskRead,
    TaskUpdate,
)

router = APIRouter(prefix="/api", tags=["tasks"])


@router.post("/projects/{project_id}/tasks", response_model=TaskRead)
def create_task_endpoint(
    project_id: str,
    payload: TaskCreate,
    db: Session = Depends(get_db),
    dispatcher: EventDispatcher = Depends(get_event_dispatcher),
    current_user: User = Depends(get_current_user),
) -> TaskRead:
    try:
        task = create_task(
            db,
            dispatcher,
            project_id=project_id,
            user_id=current_user.id,
            title=payload.title,
            description=payload.description,
            priority=payload.priority,
            assignee_id=payload.assignee_id,
            due_date=payload.due_date,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return TaskRead.model_validate(task)


@router.get("/projects/{project_id}/tasks", response_model=list[TaskRead])
def list_tasks_endpoint(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[TaskRead]:
    try:
        tasks = list_tasks(db, project_id=project_id, user_id=current_user.id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return [TaskRead.model_validate(task) for task in tasks]


@router.get("/tasks/{task_id}", response_model=TaskRead)
def get_task_endpoint(
    task_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> TaskRead:
    try:
        task = get_task(db, task_id=task_id, user_id=current_user.id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return TaskRead.model_validate(task)


@router.put("/tasks/{task_id}", response_model=TaskRead)
def update_task_endpoint(
    task_id: str,
    payload: TaskUpdate,
    db: Session = Depends(get_db),
    dispatcher: EventDispatcher = Depends(get_event_dispatcher),
    current_user: User = Depends(get_current_user),
) -> TaskRead:
    try:
        task = update_task(
            db,
            dispatcher,
            task_id=task_id,
            user_id=current_user.id,
            changes=payload.model_dump(exclude_unset=True),
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return TaskRead.model_validate(task)


@router.delete("/tasks/{task_id}", response_model=SuccessResponse)
def delete_task_endpoint(
    task_id: str,
    db: Session = Depends(get_db),
    dispatcher: EventDispatcher = Depends(get_event_dispatcher),
    current_user: User = Depends(get_current_user),
) -> SuccessResponse:
    try:
        delete_task(db, dispatcher, task_id=task_id, user_id=current_user.id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return SuccessResponse()


@router.post("/tasks/{task_id}/comments", response_model=CommentRead)
def add_comment_endpoint(
    task_id: str,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    dispatcher: EventDispatcher = Depends(get_event_dispatcher),
    current_user: User = Depends(get_current_user),
) -> CommentRead:
    try:
        comment = add_comment(
            db,
            dispatcher,
            task_id=task_id,
            user_id=current_user.id,
            content=payload.content,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return CommentRead.model_validate(comment)


@router.get("/tasks/{task_id}/comments", response_model=list[CommentRead])
def list_comments_endpoint(
    task_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[CommentRead]:
    try:
        comments = list_comments(db, task_id=task_id, user_id=current_user.id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return [CommentRead.model_validate(comment) for comment in comments]
