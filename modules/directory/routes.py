# modules/directory/routes.py
from typing import Optional

from fastapi import APIRouter, Depends, status as http_status
from sqlalchemy.orm import Session

from core.filtering import ALL, parse_filter, parse_id_filter
from database.connection import get_db
from modules.directory import schemas, services
from modules.security.deps import get_current_user

api_router = APIRouter(dependencies=[Depends(get_current_user)])


# ---------- API : Staff ----------
@api_router.get("/staff/", response_model=schemas.StaffListView)
def read_staff_route(
    search: Optional[str] = None,
    department: Optional[str] = ALL,
    status: Optional[str] = ALL,
    role: Optional[str] = ALL,
    db: Session = Depends(get_db),
):
    return services.staff_list_view(
        db,
        search_term=search,
        department=parse_filter(department),
        status=parse_filter(status),
        role=parse_id_filter(role, "role"),
    )


@api_router.post("/staff/", response_model=schemas.StaffOut, status_code=http_status.HTTP_201_CREATED)
def create_staff_route(staff: schemas.StaffCreate, db: Session = Depends(get_db)):
    return services.create_staff(db=db, staff=staff)


@api_router.get("/staff/{staff_id}", response_model=schemas.StaffOut)
def read_one_staff_route(staff_id: int, db: Session = Depends(get_db)):
    return services.get_staff(db=db, staff_id=staff_id)


@api_router.put("/staff/{staff_id}", response_model=schemas.StaffOut)
def update_staff_route(staff_id: int, staff: schemas.StaffUpdate, db: Session = Depends(get_db)):
    return services.update_staff(db=db, staff_id=staff_id, staff_update=staff)


@api_router.delete("/staff/{staff_id}", status_code=200)
def delete_staff_route(staff_id: int, db: Session = Depends(get_db)):
    services.delete_staff(db=db, staff_id=staff_id)
    return {"message": "Staff deleted successfully"}


# ---------- API : Departments ----------
@api_router.get("/departments/", response_model=schemas.DepartmentListView)
def read_departments_route(search: Optional[str] = None, db: Session = Depends(get_db)):
    return services.department_list_view(db, search_term=search)


@api_router.post("/departments/", response_model=schemas.DepartmentOut, status_code=http_status.HTTP_201_CREATED)
def create_department_route(department: schemas.DepartmentCreate, db: Session = Depends(get_db)):
    return services.create_department(db=db, department=department)


@api_router.get("/departments/{department_id}", response_model=schemas.DepartmentDetailView)
def read_department_route(department_id: int, db: Session = Depends(get_db)):
    return services.department_detail_view(db, department_id)


@api_router.put("/departments/{department_id}", response_model=schemas.DepartmentUpdateOut)
def update_department_route(
    department_id: int, department: schemas.DepartmentUpdate, db: Session = Depends(get_db)
):
    return services.update_department(db=db, department_id=department_id, department_update=department)


@api_router.delete("/departments/{department_id}", status_code=200)
def delete_department_route(department_id: int, db: Session = Depends(get_db)):
    services.delete_department(db=db, department_id=department_id)
    return {"message": "Department deleted successfully"}


# ---------- API : Roles ----------
@api_router.get("/roles/", response_model=schemas.RoleListView)
def read_roles_route(db: Session = Depends(get_db)):
    return services.role_list_view(db)


@api_router.post("/roles/", response_model=schemas.RoleOut, status_code=http_status.HTTP_201_CREATED)
def create_role_route(role: schemas.RoleCreate, db: Session = Depends(get_db)):
    return services.create_role(db=db, role=role)


@api_router.put("/roles/{role_id}", response_model=schemas.RoleOut)
def update_role_route(role_id: int, role: schemas.RoleUpdate, db: Session = Depends(get_db)):
    return services.update_role(db=db, role_id=role_id, role_update=role)


@api_router.delete("/roles/{role_id}", status_code=200)
def delete_role_route(role_id: int, db: Session = Depends(get_db)):
    services.delete_role(db=db, role_id=role_id)
    return {"message": "Role deleted successfully"}
