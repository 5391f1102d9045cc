# pylint: disable=missing-module-docstring,missing-class-docstring
import datetime

import factory
from django.contrib import auth

from registrations.models import Course, Document, Student, Teacher
from registrations.roles import Role

User = auth.get_user_model()

USER_PASSWORD = "password"


class UserFactory(factory.django.DjangoModelFactory):
    username = factory.Sequence(lambda n: "user_%d" % n)
    password = factory.PostGenerationMethodCall("set_password", USER_PASSWORD)
    email = factory.Sequence(lambda n: "user_%d@example.com" % n)
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    role = Role.STUDENT
    is_active = True

    class Meta:
        model = User
        skip_postgeneration_save = True


class AdminFactory(UserFactory):
    role = Role.ADMIN
    is_staff = True


class TeacherUserFactory(UserFactory):
    role = Role.TEACHER


class ProfileAttributeMixin:
    """Mixin for profile factories whose row may already exist for the user."""

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Update the profile created with the account instead of inserting a second one."""
        user = kwargs.pop("user")
        instance, _ = model_class.objects.update_or_create(user=user, defaults=kwargs)
        return instance


class StudentFactory(ProfileAttributeMixin, factory.django.DjangoModelFactory):
    """
    Factory for a student with a complete profile.
    """

    user = factory.SubFactory(UserFactory, role=Role.STUDENT)
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    date_of_birth = datetime.date(2001, 5, 17)
    gender = Student.Gender.FEMALE
    phone_number = factory.Sequence(lambda n: "+21355500%04d" % n)
    nationality = "Algerian"
    language = "French"
    education_level = "University"
    study_location = "Algiers"

    class Meta:
        model = Student


class TeacherFactory(ProfileAttributeMixin, factory.django.DjangoModelFactory):
    user = factory.SubFactory(TeacherUserFactory)
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    specialization = "English"

    class Meta:
        model = Teacher


class CourseFactory(factory.django.DjangoModelFactory):
    key = factory.Sequence(lambda n: "course-%d" % n)
    title = factory.Faker("sentence", nb_words=3)
    is_active = True

    class Meta:
        model = Course


class DocumentFactory(factory.django.DjangoModelFactory):
    student = factory.SubFactory(StudentFactory)
    type = Document.Type.PHOTO
    status = Document.Status.PENDING
    file_url = factory.Sequence(lambda n: "https://files.example.com/documents/%d.pdf" % n)

    class Meta:
        model = Document


def approve_all_documents(student):
    """Give the student one approved document of every type."""
    return [
        DocumentFactory(student=student, type=doc_type, status=Document.Status.APPROVED)
        for doc_type in Document.Type.values
    ]
