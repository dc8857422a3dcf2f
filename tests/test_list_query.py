from datetime import date

from tests.base import ConstructionTestBase

from app.core.config import settings
from app.models.material import Material
from app.models.task import Task
from app.schemas.common import Pagination, QueryInfo, Sort
from app.schemas.materials import MaterialFilter
from app.services.list_query import FilterSet, SortSpec, paginate, paginate_query
from app.services.materials import list_materials
from app.services.sites import site_schedule


class PaginationTests(ConstructionTestBase):
    def setUp(self):
        super().setUp()
        # names run backwards so name order and id order disagree
        for i in range(25):
            self._material(name=f"Material {99 - i:02d}", cost=float(i + 1))

    def test_third_page_of_twenty_five_rows_holds_five(self):
        with self.SessionLocal() as db:
            page = list_materials(db, MaterialFilter(page_number=3, page_size=10))
        self.assertEqual(len(page.items), 5)
        self.assertEqual(page.query_info.num_items, 25)
        self.assertEqual(page.query_info.num_pages, 3)
        self.assertEqual(page.pagination.page_number, 3)

    def test_item_count_matches_rows_walked_across_pages(self):
        seen = []
        with self.SessionLocal() as db:
            first = list_materials(db, MaterialFilter(page_size=7, cost_min=4))
            for number in range(1, first.query_info.num_pages + 1):
                page = list_materials(db, MaterialFilter(page_number=number, page_size=7, cost_min=4))
                seen.extend(row.id for row in page.items)
        self.assertEqual(first.query_info.num_items, 22)
        self.assertEqual(len(seen), first.query_info.num_items)
        self.assertEqual(len(set(seen)), len(seen))

    def test_page_past_the_end_is_empty_but_keeps_totals(self):
        with self.SessionLocal() as db:
            page = list_materials(db, MaterialFilter(page_number=9, page_size=10))
        self.assertEqual(page.items, [])
        self.assertEqual(page.query_info.num_items, 25)
        self.assertEqual(page.query_info.num_pages, 3)

    def test_unknown_sort_key_falls_back_to_primary_key(self):
        with self.SessionLocal() as db:
            page = list_materials(db, MaterialFilter(page_size=25, sort_by="no_such_column"))
            expected = [row.id for row in db.query(Material.id).order_by(Material.id)]
        self.assertEqual([row.id for row in page.items], expected)

    def test_known_sort_key_orders_and_respects_direction(self):
        with self.SessionLocal() as db:
            asc_page = list_materials(db, MaterialFilter(page_size=25, sort_by="name"))
            desc_page = list_materials(db, MaterialFilter(page_size=25, sort_by="name", sort_direction="desc"))
        names = [row.name for row in asc_page.items]
        self.assertEqual(names, sorted(names))
        self.assertEqual([row.name for row in desc_page.items], list(reversed(names)))

    def test_blank_filter_values_behave_like_absent_ones(self):
        blank = MaterialFilter.model_validate({"name": "", "cost_min": "  ", "excess_usage": ""})
        self.assertIsNone(blank.name)
        self.assertIsNone(blank.cost_min)
        self.assertIsNone(blank.excess_usage)
        with self.SessionLocal() as db:
            with_blanks = list_materials(db, blank)
            without = list_materials(db, MaterialFilter())
        self.assertEqual(with_blanks.query_info.num_items, without.query_info.num_items)
        self.assertEqual([r.id for r in with_blanks.items], [r.id for r in without.items])

    def test_blank_query_parameters_over_http(self):
        with_blanks = self.client.get("/api/materials?name=&cost_min=&cost_max=&excess_usage=&page_size=")
        without = self.client.get("/api/materials")
        self.assertEqual(with_blanks.status_code, 200)
        self.assertIn("25 items, 3 pages", with_blanks.text)
        self.assertIn("25 items, 3 pages", without.text)

    def test_huge_page_number_is_rejected_as_invalid_input(self):
        response = self.client.get("/api/materials?page_number=99999999999999999999")
        self.assertEqual(response.status_code, 422)
        self.assertIn("page_number", response.text)
        self.assertNotIn("Server error", response.text)

    def test_name_filter_is_case_insensitive_substring(self):
        with self.SessionLocal() as db:
            page = list_materials(db, MaterialFilter(name="material 9"))
        self.assertEqual(page.query_info.num_items, 10)


class PaginationModelTests(ConstructionTestBase):
    def test_page_number_and_size_are_clamped_to_one(self):
        pagination = Pagination(page_number=0, page_size=0)
        self.assertEqual(pagination.page_number, 1)
        self.assertEqual(pagination.page_size, 1)
        self.assertEqual(pagination.offset, 0)
        self.assertEqual(Pagination(page_number=-5).page_number, 1)
        self.assertEqual(Pagination(page_number=10**20).page_number, settings.MAX_PAGE_NUMBER)

    def test_num_pages_rounds_up_and_is_zero_without_items(self):
        self.assertEqual(QueryInfo.build(0, 10).num_pages, 0)
        self.assertEqual(QueryInfo.build(1, 10).num_pages, 1)
        self.assertEqual(QueryInfo.build(10, 10).num_pages, 1)
        self.assertEqual(QueryInfo.build(11, 10).num_pages, 2)

    def test_empty_table_gives_zero_pages(self):
        with self.SessionLocal() as db:
            page = list_materials(db, MaterialFilter())
        self.assertEqual(page.items, [])
        self.assertEqual(page.query_info.num_pages, 0)
        self.assertEqual(page.query_info.num_items, 0)

    def test_filter_set_skips_absent_values(self):
        filters = FilterSet().add(Material.name, "~", None).add(Material.cost, ">=", 5)
        self.assertEqual(len(filters), 1)
        with self.assertRaises(ValueError):
            FilterSet().add(Material.name, "like", "x")

    def test_count_and_page_share_the_same_predicates(self):
        for cost in (1.0, 5.0, 9.0):
            self._material(name=f"M{cost}", cost=cost)
        spec = SortSpec(allowed={"cost": Material.cost}, default=Material.id)
        with self.SessionLocal() as db:
            page = paginate(
                db.query(Material.id, Material.cost),
                FilterSet().add(Material.cost, ">", 2),
                spec,
                Sort(sort_by="cost", sort_direction="desc"),
                Pagination(page_size=1),
            )
        self.assertEqual(page.query_info.num_items, 2)
        self.assertEqual(page.query_info.num_pages, 2)
        self.assertEqual([row.cost for row in page.items], [9.0])


class SubListPaginationTests(ConstructionTestBase):
    def setUp(self):
        super().setUp()
        area = self._area(self._department().id)
        self.site = self._site(area.id, self._client().id)
        starts = [date(2024, 3, 1), date(2024, 1, 1), date(2024, 3, 1), date(2024, 1, 1), date(2024, 3, 1)]
        self.tasks = [
            self._task(self.site.id, name=f"Task {i}", start=start, end=date(2024, 6, 1))
            for i, start in enumerate(starts)
        ]

    def test_rows_with_equal_start_are_ordered_by_id(self):
        expected = [t.id for t in sorted(self.tasks, key=lambda t: (t.period_start, t.id))]
        with self.SessionLocal() as db:
            page = site_schedule(db, self.site.id, Pagination(page_size=10))
        self.assertEqual([row.id for row in page.items], expected)

    def test_pages_never_repeat_or_skip_rows(self):
        seen = []
        with self.SessionLocal() as db:
            for number in (1, 2, 3):
                page = site_schedule(db, self.site.id, Pagination(page_number=number, page_size=2))
                seen.extend(row.id for row in page.items)
        self.assertEqual(page.query_info.num_pages, 3)
        self.assertEqual(sorted(seen), sorted(t.id for t in self.tasks))
        self.assertEqual(len(seen), len(set(seen)))

    def test_order_columns_are_required(self):
        with self.SessionLocal() as db:
            with self.assertRaises(ValueError):
                paginate_query(db.query(Task.id), Pagination())
