"""FastAPI routes for the Kiosk domain — cart, checkout, menu and custom-cake handoff."""

from fastapi import APIRouter, HTTPException, Request
from protean.exceptions import ValidationError

from kiosk.api.schemas import (
    AddCartItemRequest,
    AddCustomCakeRequest,
    CartLineResponse,
    CartResponse,
    CheckoutRequest,
    HandoffSessionResponse,
    HandoffStatusResponse,
    MenuItemResponse,
    OrderResponse,
    StartHandoffRequest,
    UpdateCartQuantityRequest,
)
from kiosk.cart import pricing
from kiosk.cart.cart import CartLineItem, FlavorSelection, SizeSelection
from kiosk.cart.store import CartStore
from kiosk.checkout.checkout import place_order
from kiosk.handoff.handoff import custom_cake_line_item, start_handoff
from kiosk.menu.catalog import is_orderable, load_menu, menu_item_ref
from shared.backend import get_backend
from shared.backend.errors import BackendError


def get_cart_store(request: Request) -> CartStore:
    """The process-wide cart store, hydrated on first use."""
    store = getattr(request.app.state, "cart_store", None)
    if store is None:
        store = CartStore()
        request.app.state.cart_store = store
    store.hydrate()
    return store


def _bad_gateway(exc: BackendError) -> HTTPException:
    return HTTPException(status_code=502, detail=exc.message)


def _orderable_menu_item(backend, menu_item_id):
    try:
        menu_item = backend.get_menu_item(menu_item_id)
    except BackendError as exc:
        raise _bad_gateway(exc) from exc

    if not is_orderable(menu_item):
        raise ValidationError({"menu_item_id": [f"{menu_item.name} is not available"]})
    return menu_item


def _cart_response(store: CartStore) -> CartResponse:
    return CartResponse(
        items=[
            CartLineResponse(
                item_id=str(line.id),
                menu_item_id=line.menu_item_id,
                name=line.menu_item.name,
                quantity=line.quantity,
                flavor_id=line.flavor_id,
                size_id=line.size_id,
                unit_price=pricing.unit_price(line),
                line_total=pricing.line_total(line),
                is_custom_cake=line.is_custom_cake,
                custom_cake_design=line.design,
                special_instructions=line.special_instructions,
            )
            for line in store.items
        ],
        item_count=store.item_count,
        subtotal=store.subtotal,
        tax=store.tax,
        total=store.total,
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(request: Request) -> CartResponse:
    return _cart_response(get_cart_store(request))


@cart_router.post("/items", status_code=201, response_model=CartResponse)
async def add_cart_item(request: Request, body: AddCartItemRequest) -> CartResponse:
    store = get_cart_store(request)
    menu_item = _orderable_menu_item(get_backend(), body.menu_item_id)

    item = CartLineItem.build(
        menu_item=menu_item_ref(menu_item),
        quantity=body.quantity,
        flavor=FlavorSelection(**body.flavor.model_dump()) if body.flavor else None,
        size=SizeSelection(**body.size.model_dump()) if body.size else None,
        custom_cake_design=body.custom_cake_design,
        special_instructions=body.special_instructions,
    )
    store.add_item(item)
    return _cart_response(store)


@cart_router.put("/items/{menu_item_id}", response_model=CartResponse)
async def update_cart_quantity(request: Request, menu_item_id: int, body: UpdateCartQuantityRequest) -> CartResponse:
    store = get_cart_store(request)
    store.update_quantity(menu_item_id, body.quantity)
    return _cart_response(store)


@cart_router.delete("/items/{menu_item_id}", response_model=CartResponse)
async def remove_cart_item(request: Request, menu_item_id: int) -> CartResponse:
    store = get_cart_store(request)
    store.remove_item(menu_item_id)
    return _cart_response(store)


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(request: Request) -> CartResponse:
    store = get_cart_store(request)
    store.clear()
    return _cart_response(store)


@cart_router.post("/checkout", status_code=201, response_model=OrderResponse)
async def checkout(request: Request, body: CheckoutRequest) -> OrderResponse:
    store = get_cart_store(request)
    try:
        order = place_order(
            store,
            get_backend(),
            payment_method=body.payment_method,
            order_type=body.order_type,
            special_instructions=body.special_instructions,
            reference_number=body.reference_number,
        )
    except BackendError as exc:
        raise _bad_gateway(exc) from exc

    return OrderResponse(
        order_id=order.order_id,
        verification_code=order.verification_code,
        order_number=order.order_number,
        final_amount=order.final_amount,
    )


# ---------------------------------------------------------------------------
# Menu Router
# ---------------------------------------------------------------------------
menu_router = APIRouter(prefix="/menu", tags=["menu"])


@menu_router.get("", response_model=list[MenuItemResponse])
async def list_menu(category_id: int | None = None) -> list[MenuItemResponse]:
    try:
        items = load_menu(get_backend(), category_id=category_id)
    except BackendError as exc:
        raise _bad_gateway(exc) from exc
    return [MenuItemResponse(**item.model_dump()) for item in items]


# ---------------------------------------------------------------------------
# Custom Cake Handoff Router
# ---------------------------------------------------------------------------
handoff_router = APIRouter(prefix="/handoff", tags=["handoff"])


@handoff_router.post("/sessions", status_code=201, response_model=HandoffSessionResponse)
async def open_handoff_session(body: StartHandoffRequest) -> HandoffSessionResponse:
    try:
        session = start_handoff(get_backend(), kiosk_id=body.kiosk_id)
    except BackendError as exc:
        raise _bad_gateway(exc) from exc

    return HandoffSessionResponse(
        session_token=session.session_token,
        qr_code_url=session.qr_code_url,
        editor_url=session.editor_url,
        expires_in=session.expires_in,
    )


@handoff_router.get("/sessions/{session_token}", response_model=HandoffStatusResponse)
async def poll_handoff_session(session_token: str) -> HandoffStatusResponse:
    try:
        status = get_backend().poll_session_status(session_token)
    except BackendError as exc:
        raise _bad_gateway(exc) from exc
    return HandoffStatusResponse(status=status.status, customization_data=status.customization_data)


@handoff_router.post("/sessions/{session_token}/cart", status_code=201, response_model=CartResponse)
async def add_handoff_design_to_cart(
    request: Request, session_token: str, body: AddCustomCakeRequest
) -> CartResponse:
    """Put the finished design of a completed session into the cart as its own line."""
    store = get_cart_store(request)
    backend = get_backend()

    try:
        status = backend.poll_session_status(session_token)
    except BackendError as exc:
        raise _bad_gateway(exc) from exc

    if status.status != "completed" or not status.customization_data:
        raise HTTPException(status_code=409, detail=f"Design session is {status.status}, not completed")

    menu_item = _orderable_menu_item(backend, body.menu_item_id)
    store.add_item(custom_cake_line_item(menu_item, status.customization_data, quantity=body.quantity))
    return _cart_response(store)
