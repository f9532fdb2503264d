# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Tests for `pxeloader.preference`."""

from unittest.mock import MagicMock, sentinel

from pxeloader.enum import LoaderKind
from pxeloader.models import DEFAULT_TEMPLATE_KINDS
from pxeloader.preference import (
    by_precedence,
    by_supported_order,
    get_preference_policy,
    LOADER_PRECEDENCE,
    PREFERENCE_POLICY,
    PreferencePolicyRegistry,
    select_preferred_loader,
    UnknownPreferencePolicy,
)
from pxeloader.testing.config import LoaderConfigurationFixture
from pxeloader.testing.models import make_template, make_templates
from pxetesting.factory import factory
from pxetesting.fixtures import CaptureLoaderLog
from pxetesting.testcase import PXETestCase

ALL_KINDS = (LoaderKind.PXELinux, LoaderKind.PXEGrub, LoaderKind.PXEGrub2)


class TestSelectPreferredLoader(PXETestCase):
    def test_none_for_zero_template_kinds_and_templates(self):
        self.assertIsNone(select_preferred_loader([], []))

    def test_none_for_zero_templates(self):
        self.assertIsNone(select_preferred_loader(DEFAULT_TEMPLATE_KINDS, []))

    def test_none_for_zero_template_kinds(self):
        templates = make_templates(*ALL_KINDS)
        self.assertIsNone(select_preferred_loader([], templates))

    def test_grub2_for_all_associated_templates(self):
        templates = make_templates(*ALL_KINDS)
        self.assertEqual(
            "Grub2 UEFI", select_preferred_loader(ALL_KINDS, templates)
        )

    def test_pxelinux_for_pxelinux_and_grub_templates(self):
        templates = make_templates(LoaderKind.PXELinux, LoaderKind.PXEGrub)
        self.assertEqual(
            "PXELinux BIOS",
            select_preferred_loader(DEFAULT_TEMPLATE_KINDS, templates),
        )

    def test_grub_for_grub_template(self):
        templates = make_templates(LoaderKind.PXEGrub)
        self.assertEqual(
            "Grub UEFI",
            select_preferred_loader(DEFAULT_TEMPLATE_KINDS, templates),
        )

    def test_none_when_no_supported_kind_has_a_template(self):
        templates = make_templates(LoaderKind.PXEGrub2, LoaderKind.iPXE)
        self.assertIsNone(
            select_preferred_loader([LoaderKind.PXELinux], templates)
        )

    def test_ignores_kinds_without_template(self):
        templates = make_templates(LoaderKind.PXEGrub)
        self.assertEqual(
            "Grub UEFI",
            select_preferred_loader(
                [LoaderKind.PXEGrub2, LoaderKind.PXEGrub], templates
            ),
        )

    def test_ignores_templates_of_other_kinds(self):
        templates = [
            make_template("provision"),
            make_template(LoaderKind.PXEGrub),
            factory.make_name("not-a-template"),
        ]
        self.assertEqual(
            "Grub UEFI",
            select_preferred_loader(DEFAULT_TEMPLATE_KINDS, templates),
        )

    def test_none_when_templates_have_no_loader_kind(self):
        templates = [make_template("provision"), make_template("finish")]
        self.assertIsNone(
            select_preferred_loader(DEFAULT_TEMPLATE_KINDS, templates)
        )

    def test_accepts_kind_names(self):
        templates = make_templates("PXEGrub", "PXELinux")
        self.assertEqual(
            "PXELinux BIOS",
            select_preferred_loader(["PXELinux", "PXEGrub"], templates),
        )

    def test_accepts_any_iterables(self):
        templates = iter(make_templates(*ALL_KINDS))
        self.assertEqual(
            "Grub2 UEFI",
            select_preferred_loader(iter(ALL_KINDS), templates),
        )

    def test_ipxe_is_least_preferred(self):
        templates = make_templates(LoaderKind.iPXE, LoaderKind.PXEGrub)
        self.assertEqual(
            "Grub UEFI",
            select_preferred_loader(
                [LoaderKind.iPXE, LoaderKind.PXEGrub], templates
            ),
        )

    def test_ipxe_alone(self):
        templates = make_templates(LoaderKind.iPXE)
        self.assertEqual(
            "iPXE Chain BIOS",
            select_preferred_loader([LoaderKind.iPXE], templates),
        )


class TestSelectPreferredLoaderPolicies(PXETestCase):
    def test_passes_candidates_in_supported_order(self):
        policy = self.make_policy(return_value=LoaderKind.PXEGrub)
        templates = make_templates(*ALL_KINDS)
        select_preferred_loader(
            [LoaderKind.PXEGrub, LoaderKind.iPXE, LoaderKind.PXELinux],
            templates,
            policy=policy,
        )
        policy.assert_called_once_with(
            (LoaderKind.PXEGrub, LoaderKind.PXELinux)
        )

    def test_drops_duplicate_supported_kinds(self):
        policy = self.make_policy(return_value=LoaderKind.PXEGrub)
        templates = make_templates(*ALL_KINDS)
        select_preferred_loader(
            [LoaderKind.PXEGrub, LoaderKind.PXEGrub], templates, policy=policy
        )
        policy.assert_called_once_with((LoaderKind.PXEGrub,))

    def test_renders_the_policy_choice(self):
        policy = self.make_policy(return_value=LoaderKind.PXEGrub)
        templates = make_templates(*ALL_KINDS)
        self.assertEqual(
            "Grub UEFI",
            select_preferred_loader(ALL_KINDS, templates, policy=policy),
        )

    def test_none_when_policy_chooses_nothing(self):
        policy = self.make_policy(return_value=None)
        templates = make_templates(*ALL_KINDS)
        self.assertIsNone(
            select_preferred_loader(ALL_KINDS, templates, policy=policy)
        )

    def test_policy_is_not_called_without_candidates(self):
        policy = self.make_policy(return_value=LoaderKind.PXEGrub)
        select_preferred_loader(ALL_KINDS, [], policy=policy)
        policy.assert_not_called()

    def test_none_when_policy_chooses_a_non_candidate(self):
        policy = self.make_policy(return_value=LoaderKind.iPXE)
        templates = make_templates(*ALL_KINDS)
        with CaptureLoaderLog() as log:
            self.assertIsNone(
                select_preferred_loader(ALL_KINDS, templates, policy=policy)
            )
        self.assertIn("not one of PXELinux, PXEGrub, PXEGrub2", log.output)

    def test_supported_order_by_name(self):
        templates = make_templates(*ALL_KINDS)
        self.assertEqual(
            "PXELinux BIOS",
            select_preferred_loader(
                ALL_KINDS,
                templates,
                policy=PREFERENCE_POLICY.SUPPORTED_ORDER,
            ),
        )

    def test_unknown_policy_name(self):
        templates = make_templates(*ALL_KINDS)
        self.assertRaises(
            UnknownPreferencePolicy,
            select_preferred_loader,
            ALL_KINDS,
            templates,
            policy=factory.make_name("policy"),
        )

    def make_policy(self, return_value):
        return MagicMock(__name__="policy", return_value=return_value)


class TestByPrecedence(PXETestCase):
    def test_grub2_then_pxelinux_then_grub_then_ipxe(self):
        self.assertEqual(
            (
                LoaderKind.PXEGrub2,
                LoaderKind.PXELinux,
                LoaderKind.PXEGrub,
                LoaderKind.iPXE,
            ),
            LOADER_PRECEDENCE,
        )

    def test_chooses_highest_precedence(self):
        self.assertEqual(
            LoaderKind.PXELinux,
            by_precedence((LoaderKind.PXEGrub, LoaderKind.PXELinux)),
        )

    def test_custom_precedence(self):
        self.assertEqual(
            LoaderKind.PXEGrub,
            by_precedence(
                (LoaderKind.PXELinux, LoaderKind.PXEGrub),
                precedence=(LoaderKind.PXEGrub, LoaderKind.PXELinux),
            ),
        )

    def test_none_without_candidates(self):
        self.assertIsNone(by_precedence(()))


class TestBySupportedOrder(PXETestCase):
    def test_chooses_first_candidate(self):
        kinds = [factory.pick_enum(LoaderKind) for _ in range(3)]
        self.assertEqual(kinds[0], by_supported_order(kinds))

    def test_none_without_candidates(self):
        self.assertIsNone(by_supported_order(()))


class TestGetPreferencePolicy(PXETestCase):
    def test_returns_registered_policies(self):
        self.assertIs(
            by_precedence, get_preference_policy(PREFERENCE_POLICY.PRECEDENCE)
        )
        self.assertIs(
            by_supported_order,
            get_preference_policy(PREFERENCE_POLICY.SUPPORTED_ORDER),
        )

    def test_raises_for_unknown_name(self):
        name = factory.make_name("policy")
        error = self.assertRaises(
            UnknownPreferencePolicy, get_preference_policy, name
        )
        self.assertEqual((name,), error.args)

    def test_returns_newly_registered_policy(self):
        name = factory.make_name("policy")
        PreferencePolicyRegistry.register_item(name, sentinel.policy)
        self.addCleanup(PreferencePolicyRegistry.unregister_item, name)
        self.assertIs(sentinel.policy, get_preference_policy(name))

    def test_defaults_to_precedence(self):
        self.assertIs(by_precedence, get_preference_policy())

    def test_defaults_to_configured_policy(self):
        self.useFixture(
            LoaderConfigurationFixture(
                {"loader_preference": PREFERENCE_POLICY.SUPPORTED_ORDER}
            )
        )
        self.assertIs(by_supported_order, get_preference_policy())
