"""Tests for the photo analysis service."""
import pytest

from app.core.exceptions import InvalidDescriptorError, PartnerNotFoundError
from app.domain.value_objects.matching import OtherPartnersMatchStatus, PartnerMatchStatus
from app.services.photo_analysis import PhotoAnalysisService, enrich_matches

from helpers import (
    FAR,
    NEAR,
    OTHER_USER_ID,
    QUERY,
    USER_ID,
    InMemoryPhotoStore,
    make_match,
    make_partner,
    make_photo,
)

PARTNER_A = "a0000000-0000-4000-8000-000000000001"
PARTNER_B = "b0000000-0000-4000-8000-000000000002"
STRANGER = "c0000000-0000-4000-8000-000000000003"


@pytest.fixture
def partners():
    return [
        make_partner(PARTNER_A, first_name="Alex"),
        make_partner(
            PARTNER_B,
            first_name="Jamie",
            last_name="Doe",
            profile_picture_storage_path="partners/b/profile.jpg",
            black_flag=True,
        ),
        make_partner(STRANGER, user_id=OTHER_USER_ID, first_name="Not Mine"),
    ]


class UnfilteredPhotoStore(InMemoryPhotoStore):
    """Store that hands back every photo of the requested partners."""

    async def list_photos_with_descriptors(self, partner_ids):
        return [photo for photo in self.photos if photo.partner_id in partner_ids]


def build_service(matcher, partners, photos):
    store = InMemoryPhotoStore(partners=partners, photos=photos)
    return PhotoAnalysisService(matcher=matcher, photo_store=store), store


class TestAnalyzePartnerUpload:
    """Upload to a chosen partner."""

    async def test_first_photo_proceeds(self, matcher, partners):
        service, _ = build_service(matcher, partners, [])

        analysis = await service.analyze_partner_upload(USER_ID, PARTNER_A, QUERY)

        assert analysis.decision.type == "proceed"
        assert analysis.decision.reason == "no_matches"
        assert analysis.partner_match_status == PartnerMatchStatus.NO_PHOTOS
        assert analysis.other_partners_match_status == OtherPartnersMatchStatus.NO_PHOTOS
        assert analysis.outcome == "no_matches"

    async def test_matching_own_photo_proceeds(self, matcher, partners):
        service, _ = build_service(matcher, partners, [make_photo("a-1", PARTNER_A, NEAR)])

        analysis = await service.analyze_partner_upload(USER_ID, PARTNER_A, QUERY)

        assert analysis.decision.type == "proceed"
        assert analysis.decision.reason == "matches_partner_or_no_photos"
        assert [match.photo_id for match in analysis.partner_matches] == ["a-1"]
        assert analysis.outcome == "matches_found"

    async def test_unlike_own_photos_warns_same_person(self, matcher, partners):
        service, _ = build_service(
            matcher,
            partners,
            [make_photo("a-1", PARTNER_A, FAR), make_photo("b-1", PARTNER_B, FAR)],
        )

        analysis = await service.analyze_partner_upload(USER_ID, PARTNER_A, QUERY)

        assert analysis.decision.type == "warn_same_person"
        assert analysis.partner_has_other_photos is True
        assert analysis.other_partners_match_status == OtherPartnersMatchStatus.NO_MATCH

    async def test_resembling_other_partner_warns_with_display_fields(self, matcher, partners):
        service, _ = build_service(
            matcher,
            partners,
            [make_photo("a-1", PARTNER_A, NEAR), make_photo("b-1", PARTNER_B, NEAR)],
        )

        analysis = await service.analyze_partner_upload(USER_ID, PARTNER_A, QUERY)

        assert analysis.decision.type == "warn_other_partners"
        [match] = analysis.decision.matches
        assert match.photo_id == "b-1"
        assert match.partner_id == PARTNER_B
        assert match.partner_name == "Jamie Doe"
        assert match.partner_profile_picture == "partners/b/profile.jpg"
        assert match.black_flag is True
        assert analysis.other_partner_matches == analysis.decision.matches

    async def test_ignores_photos_of_other_users(self, matcher, partners):
        service, _ = build_service(matcher, partners, [make_photo("s-1", STRANGER, NEAR)])

        analysis = await service.analyze_partner_upload(USER_ID, PARTNER_A, QUERY)

        assert analysis.decision.type == "proceed"
        assert analysis.other_partners_have_photos is False

    async def test_mismatched_stored_descriptor_does_not_fail_upload(self, matcher, partners):
        service, _ = build_service(
            matcher,
            partners,
            [make_photo("a-old", PARTNER_A, [0.5, 0.5]), make_photo("a-1", PARTNER_A, NEAR)],
        )

        analysis = await service.analyze_partner_upload(USER_ID, PARTNER_A, QUERY)

        assert analysis.decision.type == "proceed"
        assert [match.photo_id for match in analysis.partner_matches] == ["a-1"]

    async def test_partner_of_another_user_is_not_found(self, matcher, partners):
        service, _ = build_service(matcher, partners, [])

        with pytest.raises(PartnerNotFoundError):
            await service.analyze_partner_upload(USER_ID, STRANGER, QUERY)

    async def test_invalid_descriptor_fails_before_loading(self, matcher, partners):
        service, store = build_service(matcher, partners, [])

        with pytest.raises(InvalidDescriptorError):
            await service.analyze_partner_upload(USER_ID, PARTNER_A, [])
        assert store.calls == []

    async def test_undecodable_partner_photo_counts_as_no_photos(self, matcher, partners):
        store = UnfilteredPhotoStore(
            partners=partners,
            photos=[make_photo("a-1", PARTNER_A, "[0.5, 0.5")],
        )
        service = PhotoAnalysisService(matcher=matcher, photo_store=store)

        analysis = await service.analyze_partner_upload(USER_ID, PARTNER_A, QUERY)

        assert analysis.decision.type == "proceed"
        assert analysis.decision.reason == "no_matches"
        assert analysis.partner_has_other_photos is False
        assert analysis.partner_match_status == PartnerMatchStatus.NO_PHOTOS


class TestAnalyzeUpload:
    """Upload before a partner is chosen."""

    async def test_no_partners_proposes_new_partner(self, matcher):
        service, _ = build_service(matcher, [], [])

        analysis = await service.analyze_upload(USER_ID, QUERY)

        assert analysis.decision.type == "create_new"
        assert analysis.matches == []

    async def test_no_match_proposes_new_partner(self, matcher, partners):
        service, _ = build_service(matcher, partners, [make_photo("a-1", PARTNER_A, FAR)])

        analysis = await service.analyze_upload(USER_ID, QUERY)

        assert analysis.decision.type == "create_new"

    async def test_matches_list_existing_partners(self, matcher, partners):
        service, _ = build_service(
            matcher,
            partners,
            [
                make_photo("a-1", PARTNER_A, [0.5, 0.5, 0.5, 0.53125]),
                make_photo("b-1", PARTNER_B, NEAR),
                make_photo("s-1", STRANGER, QUERY),
            ],
        )

        analysis = await service.analyze_upload(USER_ID, QUERY)

        assert analysis.decision.type == "warn_other_partners"
        assert [match.photo_id for match in analysis.matches] == ["a-1", "b-1"]
        assert [match.partner_name for match in analysis.matches] == ["Alex", "Jamie Doe"]


class TestEnrichMatches:
    """Display fields come from the owning partner."""

    def test_unknown_partner_gets_empty_fields(self):
        [enriched] = enrich_matches([make_match("p1", "gone", 95.0)], {})

        assert enriched.photo_id == "p1"
        assert enriched.similarity == 0.95
        assert enriched.partner_name is None
        assert enriched.partner_profile_picture is None
        assert enriched.black_flag is False

    def test_blank_name_becomes_none(self):
        partner = make_partner("p", first_name="  ", last_name=None)
        [enriched] = enrich_matches([make_match("p1", "p", 95.0)], {"p": partner})

        assert enriched.partner_name is None
