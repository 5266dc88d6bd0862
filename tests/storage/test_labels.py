from record_prep.storage import Label, label_len, labels_to_string


def test_labels_to_string_keeps_caller_order_and_quotes_values():
    labels = [Label("", "http_requests_total"), Label("path", '/a"b'), Label("code", "200")]

    assert labels_to_string(labels) == (
        '{__name__="http_requests_total",path="/a\\"b",code="200"}'
    )


def test_labels_to_string_of_empty_set():
    assert labels_to_string([]) == "{}"


def test_label_len_counts_utf8_bytes():
    assert label_len("abc") == 3
    assert label_len("é") == 2
    assert label_len("") == 0
