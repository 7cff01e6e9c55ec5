import pytest

from conftest import Order, OrderApi, RecordingModel
from restmongo.core.errors import RestfulApiError
from restmongo.core.query.assembler import QueryAssembler
from restmongo.core.query.builder import MongoQueryBuilder
from restmongo.core.request import ErrorBag, ResourceApi, RestfulApi


def assemble(params, model=None, api=OrderApi):
    model = model or RecordingModel()
    return QueryAssembler(RestfulApi(api, params), model)


def calls_of(assembler):
    return assembler.get_builder().calls


def test_no_active_components_leaves_bare_query():
    assembler = assemble({}, api=ResourceApi)
    assert calls_of(assembler) == []
    assert len(assembler.get_model().builders) == 1


def test_unused_parameters_add_no_constraints():
    assembler = assemble({})
    assert calls_of(assembler) == []


def test_builder_is_created_once_and_reused(recording_model):
    assembler = assemble(
        {"filtering": {"status:in": ["a"]}, "limit": 5, "sort": "total"},
        model=recording_model,
    )
    assert assembler.get_builder() is assembler.get_builder()
    assert len(recording_model.builders) == 1


@pytest.mark.parametrize(
    "key, value, expected",
    [
        ("status:in", ["active", "pending"], ("where_in", ("status", ["active", "pending"]))),
        ("status:not_in", ["closed"], ("where_not_in", ("status", ["closed"]))),
        ("total:between", [10, 20], ("where_between", ("total", [10, 20]))),
        ("total:not_between", [10, 20], ("where_not_between", ("total", [10, 20]))),
        ("title:contains", "lamp", ("where", ("title", "like", "%lamp%"))),
    ],
)
def test_named_filter_operators_map_to_dedicated_calls(key, value, expected):
    assembler = assemble({"filtering": {key: value}})
    assert calls_of(assembler) == [expected]


@pytest.mark.parametrize("operator", ["eq", "ne", "gt", "gte", "lt", "lte"])
def test_other_operators_pass_through_verbatim(operator):
    field = "status" if operator in ("eq", "ne") else "total"
    assembler = assemble({"filtering": {f"{field}:{operator}": 7}})
    assert calls_of(assembler) == [("where", (field, operator, 7))]


def test_typed_filter_values_are_converted():
    assembler = assemble({"filtering": {"total:gte": "10", "total:between": "5,20"}})
    assert calls_of(assembler) == [
        ("where", ("total", "gte", 10)),
        ("where_between", ("total", [5, 20])),
    ]


def test_filter_without_operator_is_equality():
    assembler = assemble({"filtering": {"status": "paid"}})
    assert calls_of(assembler) == [("where", ("status", "eq", "paid"))]


def test_filters_each_add_one_constraint():
    assembler = assemble({"filtering": {"status:in": "a,b", "total:gte": 5}})
    assert calls_of(assembler) == [
        ("where_in", ("status", ["a", "b"])),
        ("where", ("total", "gte", 5)),
    ]


@pytest.mark.parametrize(
    "params, expected",
    [
        ({"limit": 0, "offset": 0}, []),
        ({"limit": "", "offset": ""}, []),
        ({"limit": 10}, [("limit", (10,))]),
        ({"offset": 20}, [("offset", (20,))]),
        ({"limit": "10", "offset": "20"}, [("limit", (10,)), ("offset", (20,))]),
    ],
)
def test_pagination_treats_zero_as_absent(params, expected):
    assert calls_of(assemble(params)) == expected


def test_field_selection_only_selects_atomic_top_level_fields():
    assembler = assemble({"fields": "name,address{city}"})
    assert calls_of(assembler) == [("add_select", ("name",))]


def test_structured_field_without_subselection_is_not_selected():
    assembler = assemble({"fields": "id,items"})
    assert calls_of(assembler) == [("add_select", ("id",))]


def test_sort_applies_field_and_direction():
    assembler = assemble({"sort": "created_at", "direction": "desc"})
    assert calls_of(assembler) == [("order_by", ("created_at", "desc"))]


def test_sort_without_field_is_noop():
    assert calls_of(assemble({"direction": "desc"})) == []


def test_search_wraps_value_in_wildcards():
    assembler = assemble({"search": "lamp"})
    assert calls_of(assembler) == [("where", ("title", "like", "%lamp%"))]


def test_empty_search_is_noop():
    assert calls_of(assemble({"search": ""})) == []


def test_invalid_component_is_skipped_while_others_apply():
    assembler = assemble(
        {"filtering": {"secret:eq": 1}, "limit": 10, "sort": "unknown"}
    )
    assert calls_of(assembler) == [("limit", (10,))]
    assert assembler.validate().fails()


def test_end_to_end_order_of_calls():
    assembler = assemble(
        {
            "sort": "created_at",
            "direction": "desc",
            "limit": 10,
            "offset": 20,
            "filtering": {"status:in": ["active", "pending"]},
        }
    )
    assert calls_of(assembler) == [
        ("where_in", ("status", ["active", "pending"])),
        ("limit", (10,)),
        ("offset", (20,)),
        ("order_by", ("created_at", "desc")),
    ]


def test_steps_run_in_fixed_order():
    assembler = assemble(
        {
            "search": "lamp",
            "sort": "total",
            "limit": 3,
            "filtering": {"status": "paid"},
            "fields": "id",
        }
    )
    assert [name for name, _ in calls_of(assembler)] == [
        "add_select",
        "where",
        "limit",
        "order_by",
        "where",
    ]


def test_validate_passes_through_to_descriptor():
    assembler = assemble({"limit": 500})
    bag = ErrorBag()
    result = assembler.validate(bag)
    assert result is bag
    assert bag.errors == {"pagination": ["'limit' must not exceed 100"]}


def test_accessors_return_inputs():
    restful_api = RestfulApi(OrderApi, {})
    model = RecordingModel()
    assembler = QueryAssembler(restful_api, model)
    assert assembler.get_restful_api() is restful_api
    assert assembler.get_model() is model


def test_create_builds_descriptor_from_raw_input(recording_model):
    assembler = QueryAssembler.create(recording_model, OrderApi, {"limit": 5})
    assert isinstance(assembler.get_restful_api(), RestfulApi)
    assert calls_of(assembler) == [("limit", (5,))]


def test_create_instantiates_model_type(monkeypatch, collection):
    monkeypatch.setattr(Order, "get_collection", lambda self: collection)
    assembler = QueryAssembler.create(Order, OrderApi, {"sort": "total"})
    assert isinstance(assembler.get_model(), Order)
    builder = assembler.get_builder()
    assert isinstance(builder, MongoQueryBuilder)
    assert builder.to_find_kwargs() == {"filter": {}, "sort": [("total", 1)]}


def test_create_propagates_descriptor_errors(recording_model):
    with pytest.raises(RestfulApiError):
        QueryAssembler.create(recording_model, OrderApi, {"filtering": "status=paid"})
    with pytest.raises(RestfulApiError):
        QueryAssembler.create(recording_model, OrderApi, {"fields": "address{city"})


def test_debug_logging_shows_values_containing_markup(monkeypatch):
    from rich.console import Console

    from restmongo.core.logging import log

    monkeypatch.setattr(log, "console", Console(record=True, width=200))
    monkeypatch.setattr(log, "level", "DEBUG")

    assembler = assemble({"search": "[/x] lamp", "filtering": {"status": "[red]paid"}})

    assert calls_of(assembler) == [
        ("where", ("status", "eq", "[red]paid")),
        ("where", ("title", "like", "%[/x] lamp%")),
    ]
    text = log.console.export_text()
    assert "[red]paid" in text
    assert "[/x] lamp" in text
