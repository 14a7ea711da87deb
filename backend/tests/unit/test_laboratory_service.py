"""
Unit tests for LaboratoryService.

Mocked repository tests check the collaboration; in-memory tests check the
ownership rules end to end.
"""

import pytest

from dentallab.core.exceptions import (
    DuplicateEmailError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from dentallab.repositories import LaboratoryRepository
from dentallab.services.laboratory_service import LaboratoryService
from tests.factories.entity_factories import (
    SequentialIdGenerator,
    make_address,
    make_laboratory,
)
from tests.factories.repository_factories import (
    IdGeneratorFactory,
    LaboratoryRepositoryFactory,
)


@pytest.fixture
def mock_laboratory_repo():
    return LaboratoryRepositoryFactory.create_mock_full()


@pytest.fixture
def mocked_service(mock_laboratory_repo):
    return LaboratoryService(mock_laboratory_repo, IdGeneratorFactory.create_mock("lab-9"))


@pytest.fixture
def service():
    return LaboratoryService(LaboratoryRepository(), SequentialIdGenerator("lab"))


def _create(service, email="contact@smilelab.com"):
    return service.create_laboratory(
        name="Smile Lab", email=email, phone="+5511999999999", address=make_address()
    )


@pytest.mark.services
class TestLaboratoryServiceWithMocks:
    def test_create_uses_generated_id(self, mocked_service, mock_laboratory_repo):
        lab = _create(mocked_service)

        assert lab.id == "lab-9"
        mock_laboratory_repo.get_by_email.assert_called_once_with("contact@smilelab.com")
        mock_laboratory_repo.create.assert_called_once()

    def test_email_is_trimmed_before_lookup(self, mocked_service, mock_laboratory_repo):
        lab = _create(mocked_service, email="  contact@smilelab.com ")

        assert lab.email == "contact@smilelab.com"
        mock_laboratory_repo.get_by_email.assert_called_once_with("contact@smilelab.com")

    def test_update_goes_through_one_repository_step(
        self, mocked_service, mock_laboratory_repo
    ):
        mock_laboratory_repo.get_by_id.return_value = make_laboratory(id="lab-1")

        updated = mocked_service.update_laboratory(
            "lab-1", "lab-1", "Renamed", "contact@smilelab.com",
            "+5511999999999", make_address(),
        )

        assert updated.name == "Renamed"
        mock_laboratory_repo.update.assert_called_once()
        assert mock_laboratory_repo.update.call_args.args[0] == "lab-1"

    def test_create_rejects_duplicate_email(self, mocked_service, mock_laboratory_repo):
        mock_laboratory_repo.get_by_email.return_value = make_laboratory()

        with pytest.raises(DuplicateEmailError):
            _create(mocked_service)
        mock_laboratory_repo.create.assert_not_called()

    def test_invalid_data_is_not_persisted(self, mocked_service, mock_laboratory_repo):
        with pytest.raises(ValidationError):
            mocked_service.create_laboratory(
                name="", email="x", phone="", address=make_address()
            )
        mock_laboratory_repo.create.assert_not_called()

    def test_unexpected_storage_failure_becomes_internal_error(
        self, mocked_service, mock_laboratory_repo
    ):
        mock_laboratory_repo.list_all.side_effect = RuntimeError("disk on fire")

        with pytest.raises(InternalError):
            mocked_service.list_laboratories()


@pytest.mark.services
class TestLaboratoryServiceRules:
    def test_get_and_list(self, service):
        lab = _create(service)

        assert service.get_laboratory(lab.id).name == "Smile Lab"
        assert [l.id for l in service.list_laboratories()] == [lab.id]

    def test_get_missing_is_not_found(self, service):
        with pytest.raises(NotFoundError):
            service.get_laboratory("nope")

    def test_update_by_itself(self, service):
        lab = _create(service)

        updated = service.update_laboratory(
            lab.id, lab.id, name="Renamed", email=lab.email, phone=lab.phone,
            address=lab.address,
        )

        assert updated.name == "Renamed"
        assert service.get_laboratory(lab.id).name == "Renamed"

    def test_update_by_another_laboratory_is_not_found(self, service):
        lab = _create(service)
        other = _create(service, email="other@lab.com")

        with pytest.raises(NotFoundError):
            service.update_laboratory(
                lab.id, other.id, name="Hijack", email=lab.email, phone=lab.phone,
                address=lab.address,
            )
        assert service.get_laboratory(lab.id).name == "Smile Lab"

    def test_update_to_taken_email_is_duplicate(self, service):
        lab = _create(service)
        _create(service, email="taken@lab.com")

        with pytest.raises(DuplicateEmailError):
            service.update_laboratory(
                lab.id, lab.id, name=lab.name, email="taken@lab.com",
                phone=lab.phone, address=lab.address,
            )

    def test_delete_then_second_delete(self, service):
        lab = _create(service)

        service.delete_laboratory(lab.id, lab.id)

        with pytest.raises(NotFoundError):
            service.get_laboratory(lab.id)
        with pytest.raises(NotFoundError):
            service.delete_laboratory(lab.id, lab.id)

    def test_delete_by_another_laboratory_is_not_found(self, service):
        lab = _create(service)
        with pytest.raises(NotFoundError):
            service.delete_laboratory(lab.id, None)
        assert service.get_laboratory(lab.id).id == lab.id

    def test_email_of_deleted_laboratory_can_be_reused(self, service):
        lab = _create(service)
        service.delete_laboratory(lab.id, lab.id)

        assert _create(service).id != lab.id
