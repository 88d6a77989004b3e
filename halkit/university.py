"""A small university data model: courses, students and their enrolments.

The university owns its students and courses.  A student refers to the
courses taken only weakly, so a course that is no longer held by anything
else shows up as ``"unknown"`` in the student's course list.

There are three ways to delete a student:

* :meth:`University.del_student` deletes if present and is silent otherwise;
* :meth:`University.remove_student` raises :class:`StudentNotFoundError`
  when the student does not exist;
* :meth:`University.pop_student` returns ``None`` when the student does not
  exist.
"""

from __future__ import annotations

import dataclasses
import logging
import weakref
from typing import List, Optional, Tuple

log = logging.getLogger(__name__)

UNKNOWN = "unknown"


class StudentNotFoundError(LookupError):
    """Raised when a student to be removed is not in the university."""

    def __init__(self, student_name: str) -> None:
        super().__init__(f"{student_name} is not found")
        self.student_name = student_name


@dataclasses.dataclass(frozen=True)
class Course:
    """A course offered by a university."""

    name: str = UNKNOWN


class Student:
    """A student, holding weak references to the courses taken."""

    def __init__(self, name: str = UNKNOWN) -> None:
        self.name = name
        self._courses: List[weakref.ref] = []

    def __repr__(self) -> str:
        return f"Student(name={self.name!r})"

    def add(self, course: Course) -> bool:
        """Enrol in ``course``; return False if a course of that name is already taken."""
        for ref in self._courses:
            taken = ref()
            if taken is not None and taken.name == course.name:
                log.info("Course (%s) already taken", course.name)
                return False
        log.info("add Course (%s) to student (%s)", course.name, self.name)
        self._courses.append(weakref.ref(course))
        return True

    def course_names(self) -> List[str]:
        """Names of the courses taken, in order; ``"unknown"`` for a course gone."""
        names = []
        for ref in self._courses:
            course = ref()
            names.append(course.name if course is not None else UNKNOWN)
        return names


class University:
    """Owns a list of students and a list of courses."""

    def __init__(self, name: str = UNKNOWN) -> None:
        self.name = name
        self._students: List[Student] = []
        self._courses: List[Course] = []

    def __repr__(self) -> str:
        return f"University(name={self.name!r})"

    def __len__(self) -> int:
        return len(self._students)

    @property
    def students(self) -> Tuple[Student, ...]:
        """The students, in the order they were added."""
        return tuple(self._students)

    @property
    def courses(self) -> Tuple[Course, ...]:
        """The courses, in the order they were added."""
        return tuple(self._courses)

    def add_course(self, course: Course) -> None:
        """Offer ``course`` at this university."""
        self._courses.append(course)

    def add_student(self, student: Student, course_name: str) -> bool:
        """Add ``student``, enrolled in the course named ``course_name`` if offered.

        The student is added either way; returns whether the course was found.
        """
        course = next((c for c in self._courses if c.name == course_name), None)
        if course is not None:
            log.info("Course (%s) found", course.name)
            student.add(course)
        else:
            log.info("Course (%s) not found", course_name)
        self._students.append(student)
        return course is not None

    def _index(self, name: str) -> Optional[int]:
        return next(
            (i for i, student in enumerate(self._students) if student.name == name), None
        )

    def del_student(self, name: str) -> None:
        """Delete the first student called ``name``; do nothing if there is none."""
        self.pop_student(name)

    def remove_student(self, name: str) -> Student:
        """Remove and return the first student called ``name``.

        Raises :class:`StudentNotFoundError` if there is none.
        """
        student = self.pop_student(name)
        if student is None:
            raise StudentNotFoundError(name)
        return student

    def pop_student(self, name: str) -> Optional[Student]:
        """Remove and return the first student called ``name``, or None."""
        log.info("Before deleting, # of students: %d", len(self._students))
        index = self._index(name)
        if index is None:
            return None
        student = self._students.pop(index)
        log.info("After deleting, # of students: %d", len(self._students))
        return student