import pytest
from cake_studio.design.design import CakeDesign
from protean.integrations.pytest import DomainFixture
from shared.backend import set_backend
from shared.backend.fake_adapter import FakeBackend

CUSTOMER = {
    "customer_name": "Ana Santos",
    "customer_email": "ana@example.com",
    "customer_phone": "+63 917 555 0101",
}


@pytest.fixture(scope="session")
def cake_studio_bed():
    from cake_studio.domain import cake_studio

    bed = DomainFixture(cake_studio)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(cake_studio_bed):
    with cake_studio_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()


@pytest.fixture()
def backend():
    fake = FakeBackend()
    set_backend(fake)
    return fake


@pytest.fixture()
def customer():
    return dict(CUSTOMER)


@pytest.fixture()
def design():
    design = CakeDesign.start(session_token="sess-001")
    design._events.clear()
    return design


@pytest.fixture()
def design_at_review():
    """A two-layer design walked all the way to the Review step."""
    design = CakeDesign.start(session_token="sess-001")
    design.update_design(**CUSTOMER)
    design.advance()
    design.update_design(num_layers=2)
    design.advance()
    design.set_layer(1, flavor_id=1)
    design.set_layer(2, flavor_id=4)
    design.advance()
    design.set_layer(1, size_id=3)
    design.set_layer(2, size_id=2)
    design.advance()
    design.update_design(frosting_type="fondant", frosting_color="#F5E1DA")
    design.advance()
    design.update_design(cake_text="Happy 30th, Ana!", text_font="script", text_position="center")
    design.advance()
    design._events.clear()
    return design
