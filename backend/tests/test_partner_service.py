"""
Partner API - Partner Service Tests
====================================

What:  PartnerService against a real (in-memory SQLite) database, plus error
       mapping with a mocked session.

What we test:
    ✅ Create / list / get-with-offers round trips through the ORM
    ✅ Unknown, non-numeric and out-of-range ids are NotFoundError
    ✅ Update touches only the fields and media that were sent
    ✅ Unexpected session failures become DatabaseError
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from partner_api.exceptions import DatabaseError, NotFoundError
from partner_api.models import Partner, ServiceOffer
from partner_api.schemas.partner import PartnerCreate, PartnerUpdate
from partner_api.schemas.upload import StoredUpload
from partner_api.services.partner_service import PartnerService, parse_partner_id


def stored(field_name, filename):
    return StoredUpload(
        field_name=field_name,
        original_filename=filename.split("-", 3)[-1],
        filename=filename,
        path=f"/srv/uploads/{filename}",
        size=10,
        url=f"/uploads/{filename}",
    )


async def add_offer(db_session, partner_id, title, term_months):
    offer = ServiceOffer(
        partner_id=partner_id,
        title=title,
        term_months=term_months,
        rhythm_kwh_rate=0.1125,
        price_1000_kwh=112.50,
        renewable_energy=True,
        description_en=f"{title} description",
    )
    db_session.add(offer)
    await db_session.flush()
    return offer


class TestParsePartnerId:

    @pytest.mark.parametrize("raw,expected", [("1", 1), (" 42 ", 42), ("2147483647", 2147483647)])
    def test_valid(self, raw, expected):
        assert parse_partner_id(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["abc", "", "0", "-3", "+5", "1_0", "٣", "1.5", "2147483648", "99999999999999999999"],
    )
    def test_invalid(self, raw):
        assert parse_partner_id(raw) is None


class TestCreateAndList:

    @pytest.mark.asyncio
    async def test_create_assigns_id(self, db_session):
        service = PartnerService(db_session)

        partner = await service.create_partner(
            PartnerCreate(name="Rhythm Energy", description="Energy provider")
        )

        assert partner.id >= 1
        assert partner.name == "Rhythm Energy"
        assert partner.logo is None
        assert partner.created_at is not None

    @pytest.mark.asyncio
    async def test_list_in_id_order(self, db_session):
        service = PartnerService(db_session)
        for name in ("Bravo", "Alpha", "Charlie"):
            await service.create_partner(PartnerCreate(name=name, description="d"))

        partners = await service.list_partners()

        assert [p.name for p in partners] == ["Bravo", "Alpha", "Charlie"]
        assert [p.id for p in partners] == sorted(p.id for p in partners)

    @pytest.mark.asyncio
    async def test_list_empty(self, db_session):
        assert await PartnerService(db_session).list_partners() == []


class TestGetPartnerWithOffers:

    @pytest.mark.asyncio
    async def test_only_own_offers_ordered_by_term(self, db_session):
        service = PartnerService(db_session)
        rhythm = await service.create_partner(PartnerCreate(name="Rhythm", description="d"))
        other = await service.create_partner(PartnerCreate(name="Other", description="d"))
        await add_offer(db_session, rhythm.id, "24-Month Plan", 24)
        await add_offer(db_session, rhythm.id, "12-Month Plan", 12)
        await add_offer(db_session, other.id, "Other Plan", 6)

        result = await service.get_partner_with_offers(str(rhythm.id))

        assert result.partner.id == rhythm.id
        assert [o.title for o in result.service_offers] == ["12-Month Plan", "24-Month Plan"]
        assert all(o.partner_id == rhythm.id for o in result.service_offers)
        assert result.service_offers[0].rhythm_kwh_rate == pytest.approx(0.1125)
        assert len(result.service_offers[0].uuid) == 36

    @pytest.mark.asyncio
    async def test_partner_without_offers(self, db_session):
        service = PartnerService(db_session)
        partner = await service.create_partner(PartnerCreate(name="Rhythm", description="d"))

        result = await service.get_partner_with_offers(str(partner.id))

        assert result.service_offers == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("partner_id", ["999999", "abc", "0", "99999999999999999999"])
    async def test_not_found(self, db_session, partner_id):
        with pytest.raises(NotFoundError):
            await PartnerService(db_session).get_partner_with_offers(partner_id)


class TestUpdatePartner:

    @pytest.mark.asyncio
    async def test_text_fields_only_change_what_was_sent(self, db_session):
        service = PartnerService(db_session)
        partner = await service.create_partner(PartnerCreate(name="Rhythm", description="d"))
        await service.update_partner(
            str(partner.id),
            PartnerUpdate(about="First about", important_information="Keep me"),
            {},
        )

        updated = await service.update_partner(str(partner.id), PartnerUpdate(about="Second about"), {})

        assert updated.about == "Second about"
        assert updated.important_information == "Keep me"
        assert updated.name == "Rhythm"

    @pytest.mark.asyncio
    async def test_media_stored_as_filename_served_as_url(self, db_session):
        service = PartnerService(db_session)
        partner = await service.create_partner(PartnerCreate(name="Rhythm", description="d"))
        files = {
            "logo": stored("logo", "logo-1718000000000-42-test.png"),
            "company_cover": stored("company_cover", "company_cover-1718000000000-7-c.jpg"),
        }

        updated = await service.update_partner(str(partner.id), PartnerUpdate(), files)

        assert updated.logo == "/uploads/logo-1718000000000-42-test.png"
        assert updated.company_cover == "/uploads/company_cover-1718000000000-7-c.jpg"
        assert updated.marketplace_cover is None

        row = await db_session.get(Partner, partner.id)
        assert row.logo == "logo-1718000000000-42-test.png"

    @pytest.mark.asyncio
    async def test_new_upload_replaces_previous_reference(self, db_session):
        service = PartnerService(db_session)
        partner = await service.create_partner(PartnerCreate(name="Rhythm", description="d"))
        await service.update_partner(
            str(partner.id), PartnerUpdate(), {"logo": stored("logo", "logo-1-1-old.png")}
        )

        updated = await service.update_partner(
            str(partner.id), PartnerUpdate(), {"logo": stored("logo", "logo-2-2-new.png")}
        )

        assert updated.logo == "/uploads/logo-2-2-new.png"

    @pytest.mark.asyncio
    async def test_unknown_partner(self, db_session):
        with pytest.raises(NotFoundError):
            await PartnerService(db_session).update_partner("999999", PartnerUpdate(about="x"), {})


class TestDatabaseErrorMapping:

    @pytest.mark.asyncio
    async def test_create_failure(self, mock_db_session):
        mock_db_session.flush.side_effect = OperationalError("INSERT", {}, Exception("db down"))

        with pytest.raises(DatabaseError) as exc_info:
            await PartnerService(mock_db_session).create_partner(
                PartnerCreate(name="Rhythm", description="d")
            )

        assert exc_info.value.context["error_type"] == "OperationalError"

    @pytest.mark.asyncio
    async def test_list_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("db down"))

        with pytest.raises(DatabaseError):
            await PartnerService(mock_db_session).list_partners()

    @pytest.mark.asyncio
    async def test_get_failure_keeps_partner_id_in_context(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=RuntimeError("connection reset"))

        with pytest.raises(DatabaseError) as exc_info:
            await PartnerService(mock_db_session).get_partner_with_offers("7")

        assert exc_info.value.context["partner_id"] == "7"

    @pytest.mark.asyncio
    async def test_not_found_is_not_wrapped(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await PartnerService(mock_db_session).update_partner("abc", PartnerUpdate(), {})

        mock_db_session.execute.assert_not_called()
