"""Property-based tests for compliance checks using Hypothesis."""
from datetime import timedelta

from conftest import compliant_request, make_csr_pem, make_spec
from hypothesis import given, settings, strategies as st

from cert_compliance import (
    FIELD_DNS_NAMES,
    FIELD_DURATION,
    KeyUsage,
    X509Subject,
    request_matches_spec,
)

DNS_NAMES = ["example.com", "www.example.com", "api.example.com", "a.internal", "b.internal"]
IPS = ["10.0.0.1", "10.0.0.2", "192.168.1.1", "2001:db8::1", "::1"]
URIS = ["spiffe://cluster.local/ns/a/sa/b", "https://example.com/id", "urn:example:web"]
WORDS = ["Acme", "Globex", "Initech", "Umbrella", "Hooli"]
COUNTRIES = ["GB", "US", "DE", "FR"]

names = st.lists(st.sampled_from(DNS_NAMES), max_size=4)
ips = st.lists(st.sampled_from(IPS), max_size=3)
uris = st.lists(st.sampled_from(URIS), max_size=2)
words = st.lists(st.sampled_from(WORDS), max_size=2)
durations = st.one_of(st.none(), st.integers(min_value=1, max_value=365).map(lambda d: timedelta(days=d)))


@st.composite
def subjects(draw: st.DrawFn) -> X509Subject | None:
    if draw(st.booleans()):
        return None
    return X509Subject(
        organizations=draw(words),
        countries=draw(st.lists(st.sampled_from(COUNTRIES), max_size=2)),
        organizational_units=draw(words),
        localities=draw(words),
        provinces=draw(words),
        street_addresses=draw(words),
        postal_codes=draw(words),
        serial_number=draw(st.sampled_from(["", "1", "42"])),
    )


@st.composite
def specs(draw: st.DrawFn):  # type: ignore[no-untyped-def]
    return make_spec(
        common_name=draw(st.sampled_from(["", "example.com", "web"])),
        dns_names=draw(names),
        ip_addresses=draw(ips),
        uri_sans=draw(uris),
        subject=draw(subjects()),
        is_ca=draw(st.booleans()),
        usages=draw(st.lists(st.sampled_from(list(KeyUsage)), max_size=3)),
        duration=draw(durations),
    )


class TestComplianceProperties:
    @settings(deadline=None, max_examples=30)
    @given(spec=specs())
    def test_compliant_request_has_no_violations(self, spec) -> None:  # type: ignore[no-untyped-def]
        assert request_matches_spec(compliant_request(spec), spec) == []

    @settings(deadline=None, max_examples=30)
    @given(spec=specs(), data=st.data())
    def test_permuting_and_duplicating_names_is_irrelevant(self, spec, data) -> None:  # type: ignore[no-untyped-def]
        shuffled_dns = data.draw(st.permutations(spec.dns_names + spec.dns_names[:1]))
        shuffled_ips = data.draw(st.permutations(spec.ip_addresses + spec.ip_addresses[:1]))
        shuffled_uris = data.draw(st.permutations(spec.uri_sans))
        req = compliant_request(
            spec,
            request=make_csr_pem(
                common_name=spec.common_name,
                dns_names=shuffled_dns,
                ip_addresses=shuffled_ips,
                uris=shuffled_uris,
                subject=spec.subject,
            ),
            usages=data.draw(st.permutations(spec.usages)),
        )
        assert request_matches_spec(req, spec) == []

    @settings(deadline=None, max_examples=30)
    @given(spec=specs())
    def test_same_input_same_output(self, spec) -> None:  # type: ignore[no-untyped-def]
        req = compliant_request(spec, is_ca=not spec.is_ca, request=make_csr_pem(common_name="x"))
        assert request_matches_spec(req, spec) == request_matches_spec(req, spec)

    @settings(deadline=None, max_examples=30)
    @given(desired=durations, requested=durations)
    def test_duration_rule(self, desired: timedelta | None, requested: timedelta | None) -> None:
        spec = make_spec(duration=desired)
        violations = request_matches_spec(compliant_request(spec, duration=requested), spec)
        expected = desired is not None and requested is not None and desired != requested
        assert (FIELD_DURATION in violations) is expected

    @settings(deadline=None, max_examples=30)
    @given(desired=names, observed=names)
    def test_dns_violation_iff_sets_differ(self, desired: list[str], observed: list[str]) -> None:
        spec = make_spec(dns_names=desired)
        req = compliant_request(
            spec, request=make_csr_pem(common_name=spec.common_name, dns_names=observed)
        )
        violations = request_matches_spec(req, spec)
        assert (FIELD_DNS_NAMES in violations) is (set(desired) != set(observed))
