from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from ..schemas import TodoCreate, TodoOut, TodoUpdate
from ..service import TodoService

router = APIRouter(
    prefix="/api/todos",
    tags=["todos"],
)

# Bulk delete; only mounted when ENABLE_TEST_ROUTES is on.
test_router = APIRouter(
    prefix="/api/todos",
    tags=["testing"],
)


# PUBLIC_INTERFACE
def get_service(request: Request) -> TodoService:
    """
    Dependency returning the TodoService created in the application lifespan.
    """
    return request.app.state.todo_service


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return the created resource.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"description": "Text is empty or the request body is invalid"},
    },
)
def create_todo(payload: TodoCreate, service: TodoService = Depends(get_service)) -> TodoOut:
    """
    Create a new Todo.
    """
    created = service.create_todo(payload.text)
    return TodoOut(**created)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="List every Todo item, most recently created first.",
    responses={
        200: {"description": "List retrieved successfully"},
    },
)
def list_todos(service: TodoService = Depends(get_service)) -> List[TodoOut]:
    """
    List all todos, newest first. Returns an empty array when there are none.
    """
    return [TodoOut(**it) for it in service.get_all_todos()]


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={
        200: {"description": "Todo found"},
        400: {"description": "Invalid todo ID"},
        404: {"description": "Todo not found"},
    },
)
def get_todo(todo_id: int, service: TodoService = Depends(get_service)) -> TodoOut:
    """
    Retrieve a single Todo item by its ID.
    """
    return TodoOut(**service.get_todo_by_id(todo_id))


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Update Todo",
    description="Replace the text of an existing Todo item.",
    responses={
        200: {"description": "Todo updated"},
        400: {"description": "Text is empty or the request is invalid"},
        404: {"description": "Todo not found"},
    },
)
def update_todo(
    todo_id: int, payload: TodoUpdate, service: TodoService = Depends(get_service)
) -> TodoOut:
    """
    Update the text of a Todo item; created_at is preserved.
    """
    return TodoOut(**service.update_todo(todo_id, payload.text))


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Todo",
    description="Delete a Todo item by ID.",
    responses={
        204: {"description": "Todo deleted"},
        400: {"description": "Invalid todo ID"},
        404: {"description": "Todo not found"},
    },
)
def delete_todo(todo_id: int, service: TodoService = Depends(get_service)) -> Response:
    """
    Delete a Todo. Returns 204 on success, 404 if not found.
    """
    service.delete_todo(todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# PUBLIC_INTERFACE
@test_router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete All Todos",
    description="Remove every Todo item. Intended for resetting state between test runs.",
)
def truncate_todos(service: TodoService = Depends(get_service)) -> Response:
    """
    Remove all todos.
    """
    service.truncate_todos()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
