from django.test import SimpleTestCase

from jobs.pagination import ELLIPSIS, clamp_page, generate_page_labels, total_pages_for


class PageLabelTests(SimpleTestCase):
    def test_small_totals_show_every_page(self):
        for total in range(1, 8):
            for current in range(1, total + 1):
                self.assertEqual(generate_page_labels(current, total), list(range(1, total + 1)))

    def test_single_page(self):
        self.assertEqual(generate_page_labels(1, 1), [1])

    def test_first_middle_last(self):
        self.assertEqual(generate_page_labels(1, 10), [1, 2, 3, ELLIPSIS, 10])
        self.assertEqual(generate_page_labels(5, 10), [1, ELLIPSIS, 4, 5, 6, ELLIPSIS, 10])
        self.assertEqual(generate_page_labels(10, 10), [1, ELLIPSIS, 9, 10])

    def test_no_leading_ellipsis_near_start(self):
        self.assertEqual(generate_page_labels(3, 10), [1, 2, 3, 4, ELLIPSIS, 10])
        self.assertEqual(generate_page_labels(4, 10), [1, ELLIPSIS, 3, 4, 5, ELLIPSIS, 10])

    def test_no_trailing_ellipsis_near_end(self):
        self.assertEqual(generate_page_labels(8, 10), [1, ELLIPSIS, 7, 8, 9, 10])
        self.assertEqual(generate_page_labels(7, 10), [1, ELLIPSIS, 6, 7, 8, ELLIPSIS, 10])

    def test_shape_for_large_totals(self):
        for total in (8, 9, 12, 50):
            for current in range(1, total + 1):
                labels = generate_page_labels(current, total)
                numbers = [label for label in labels if label != ELLIPSIS]
                self.assertEqual(labels[0], 1)
                self.assertEqual(labels[-1], total)
                self.assertEqual(len(numbers), len(set(numbers)))
                self.assertEqual(numbers, sorted(numbers))
                self.assertLessEqual(labels.count(ELLIPSIS), 2)
                self.assertIn(current, labels)

    def test_clamp_page(self):
        self.assertEqual(clamp_page(0, 5), 1)
        self.assertEqual(clamp_page(9, 5), 5)
        self.assertEqual(clamp_page(3, 5), 3)
        self.assertEqual(clamp_page(4, 0), 1)

    def test_total_pages(self):
        self.assertEqual(total_pages_for(13, 6), 3)
        self.assertEqual(total_pages_for(12, 6), 2)
        self.assertEqual(total_pages_for(1, 6), 1)
        self.assertEqual(total_pages_for(0, 6), 0)
