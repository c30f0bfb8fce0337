import requests


class E2EAPIClient:
    """Wrapper for making HTTP requests to the API"""

    def __init__(self, endpoint, headers, timeout=30):
        self.endpoint = endpoint
        self.headers = headers
        self.timeout = timeout

    def _headers(self, headers=None):
        h = self.headers.copy()
        if headers:
            h.update(headers)
        return h

    def post(self, path, data, headers=None):
        """Make JSON POST request"""
        url = f"{self.endpoint}{path}"
        return requests.post(url, json=data, headers=self._headers(headers), timeout=self.timeout)

    def upload(self, path, *, fields, file=None, headers=None):
        """Make multipart POST request; `file` is (file_name, bytes, content_type)"""
        url = f"{self.endpoint}{path}"
        h = self._headers(headers)
        # requests sets the multipart Content-Type with its boundary
        h.pop("Content-Type", None)
        files = {"file": file} if file else None
        return requests.post(url, data=fields, files=files, headers=h, timeout=self.timeout)

    def get(self, path, params=None, headers=None):
        """Make GET request"""
        url = f"{self.endpoint}{path}"
        return requests.get(url, params=params, headers=self._headers(headers), timeout=self.timeout)

    def delete(self, path, headers=None):
        """Make DELETE request"""
        url = f"{self.endpoint}{path}"
        return requests.delete(url, headers=self._headers(headers), timeout=self.timeout)
