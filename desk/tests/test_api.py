"""
Integration tests for the front-desk HTTP API.

These tests drive every endpoint through DRF's APIClient, covering the
queue state transitions, stock updates, alert lifecycle and the error
envelope. No database is involved, so the cases build on
``APISimpleTestCase``.

To run the tests:

```
pytest -q desk/tests
```
"""
from rest_framework import status
from rest_framework.test import APIRequestFactory, APISimpleTestCase

from ..exceptions import api_exception_handler
from ..store import reset_store


class FrontDeskAPITests(APISimpleTestCase):
    def setUp(self) -> None:
        """Start every case from the seeded store."""
        self.store = reset_store()
        self.ot = next(d for d in self.store.departments.all() if d.code == 'OT')
        self.consult = next(d for d in self.store.departments.all() if d.code == 'CONSULT')
        self.johnson = self.store.doctors.all()[0]

    def assertError(self, response, status_code: int, code: str) -> None:
        self.assertEqual(response.status_code, status_code)
        self.assertIs(response.data['ok'], False)
        self.assertEqual(response.data['error']['code'], code)

    # -- departments & doctors --------------------------------------------

    def test_departments_lists_active_only(self):
        self.store.departments.create(name='Old Wing', code='OLD', is_active=False)
        response = self.client.get('/api/departments')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([d['code'] for d in response.data], ['OT', 'CONSULT'])
        self.assertEqual(set(response.data[0]), {'id', 'name', 'code', 'isActive'})

    def test_doctors(self):
        response = self.client.get('/api/doctors')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)
        self.assertEqual(response.data[0]['currentToken'], 'C-05')
        self.assertEqual(response.data[0]['departmentId'], self.consult.id)

        filtered = self.client.get('/api/doctors', {'departmentId': self.ot.id})
        self.assertEqual(filtered.data, [])
        self.assertEqual(self.client.get('/api/doctors', {'departmentId': 'x'}).status_code, 400)

    def test_doctor_next_token(self):
        response = self.client.post(f'/api/doctors/{self.johnson.id}/next-token')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['currentToken'], 'C-06')

    def test_doctor_next_token_unknown(self):
        self.assertError(self.client.post('/api/doctors/999/next-token'), 404, 'doctor_not_found')

    # -- tokens ------------------------------------------------------------

    def test_tokens(self):
        response = self.client.get('/api/tokens')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 9)
        self.assertEqual(
            set(response.data[0]),
            {'id', 'number', 'departmentId', 'doctorId', 'status', 'createdAt', 'completedAt'},
        )

    def test_create_token(self):
        response = self.client.post('/api/tokens', {'departmentId': self.consult.id}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['number'], '1')
        self.assertEqual(response.data['status'], 'waiting')

        second = self.client.post(
            '/api/tokens', {'departmentId': self.consult.id, 'doctorId': self.johnson.id}, format='json',
        )
        self.assertEqual(second.data['number'], '2')
        self.assertEqual(second.data['doctorId'], self.johnson.id)

    def test_create_token_requires_department(self):
        self.assertError(self.client.post('/api/tokens', {}, format='json'), 400, 'missing_department')
        self.assertError(
            self.client.post('/api/tokens', {'departmentId': 404}, format='json'), 404, 'department_not_found',
        )

    def test_department_and_active_tokens(self):
        response = self.client.get(f'/api/tokens/department/{self.consult.id}')
        self.assertEqual(response.data, [])
        response = self.client.get(f'/api/tokens/department/{self.ot.id}')
        self.assertEqual(len(response.data), 9)
        active = self.client.get('/api/tokens/active')
        self.assertEqual([t['number'] for t in active.data], ['12'])

    def test_ot_next_and_exhaustion(self):
        response = self.client.post('/api/tokens/ot/next')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['number'], '13')
        self.assertEqual(response.data['status'], 'active')
        for _ in range(7):
            self.assertEqual(self.client.post('/api/tokens/ot/next').status_code, 200)
        self.assertError(self.client.post('/api/tokens/ot/next'), 400, 'no_waiting_tokens')

    def test_ot_missing(self):
        self.store.departments.update(self.ot.id, is_active=False)
        self.assertError(self.client.post('/api/tokens/ot/next'), 404, 'department_not_found')
        self.assertError(self.client.post('/api/tokens/ot/reset'), 404, 'department_not_found')

    def test_ot_reset(self):
        self.client.post('/api/tokens/ot/next')
        response = self.client.post('/api/tokens/ot/reset')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'OT queue reset successfully')
        self.assertEqual(response.data['activeToken']['number'], '13')
        statuses = {t.number: t.status for t in self.store.tokens.all()}
        self.assertEqual(statuses['12'], 'completed')
        self.assertEqual(statuses['14'], 'waiting')

    # -- medicines ---------------------------------------------------------

    def test_medicines_and_low_stock(self):
        self.assertEqual(len(self.client.get('/api/medicines').data), 5)
        low = self.client.get('/api/medicines/low-stock')
        self.assertEqual(len(low.data), 3)
        self.assertTrue(all(m['currentStock'] <= m['minimumThreshold'] for m in low.data))

    def test_update_stock(self):
        insulin = next(m for m in self.store.medicines.all() if m.name == 'Insulin Injection')
        response = self.client.post(f'/api/medicines/{insulin.id}/update-stock', {'quantity': 50}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['currentStock'], 53)
        low = self.client.get('/api/medicines/low-stock')
        self.assertNotIn(insulin.id, [m['id'] for m in low.data])

    def test_update_stock_rejects_non_numbers(self):
        medicine = self.store.medicines.all()[0]
        url = f'/api/medicines/{medicine.id}/update-stock'
        for bad in ({'quantity': '5'}, {'quantity': True}, {'quantity': 2.5}, {}):
            self.assertEqual(self.client.post(url, bad, format='json').status_code, 400, bad)
        self.assertEqual(self.store.medicines.get(medicine.id).current_stock, medicine.current_stock)

    def test_update_stock_unknown(self):
        response = self.client.post('/api/medicines/999/update-stock', {'quantity': 1}, format='json')
        self.assertError(response, 404, 'medicine_not_found')

    # -- alerts ------------------------------------------------------------

    def test_alert_lifecycle(self):
        response = self.client.post('/api/emergency-alerts', {'message': 'Code Blue - ICU'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['type'], 'general')
        self.assertIs(response.data['isActive'], True)
        alert_id = response.data['id']

        self.assertEqual([a['id'] for a in self.client.get('/api/emergency-alerts').data], [alert_id])

        dismissed = self.client.post(f'/api/emergency-alerts/{alert_id}/dismiss')
        self.assertEqual(dismissed.status_code, status.HTTP_200_OK)
        self.assertIs(dismissed.data['isActive'], False)
        self.assertIsNotNone(dismissed.data['dismissedAt'])
        self.assertEqual(self.client.get('/api/emergency-alerts').data, [])

    def test_invalid_alert(self):
        self.assertError(self.client.post('/api/emergency-alerts', {'message': ''}, format='json'), 400, 'invalid_alert')
        self.assertError(self.client.post('/api/emergency-alerts', {}, format='json'), 400, 'invalid_alert')
        self.assertError(
            self.client.post('/api/emergency-alerts', {'message': 'x' * 501}, format='json'), 400, 'invalid_alert',
        )

    def test_alert_text_is_returned_verbatim(self):
        text = 'Fire & smoke: ward 3 < 5 min away'
        response = self.client.post('/api/emergency-alerts', {'message': text}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], text)
        self.assertEqual(self.client.get('/api/emergency-alerts').data[0]['message'], text)

    def test_dismiss_unknown_alert(self):
        self.assertError(self.client.post('/api/emergency-alerts/77/dismiss'), 404, 'alert_not_found')

    # -- activity & ops ----------------------------------------------------

    def test_activity_logs(self):
        self.client.post('/api/tokens/ot/next')
        self.client.post(f'/api/doctors/{self.johnson.id}/next-token')
        self.client.post('/api/emergency-alerts', {'message': 'Code Blue - ICU'}, format='json')

        response = self.client.get('/api/activity-logs', {'limit': 2})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [log['message'] for log in response.data],
            ['Emergency Alert: Code Blue - ICU', 'Dr. Sarah Johnson now serving Token C-06'],
        )
        self.assertEqual(len(self.client.get('/api/activity-logs', {'limit': 'abc'}).data), 3)
        self.assertEqual(len(self.client.get('/api/activity-logs').data), 3)

    def test_healthz(self):
        response = self.client.get('/healthz')
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertIs(body['ok'], True)
        self.assertEqual(body['store']['tokens'], 9)
        self.assertEqual(body['displays'], 0)


class ErrorEnvelopeTests(APISimpleTestCase):
    def test_field_errors_use_the_exception_code(self):
        response = self.client.get('/api/doctors', {'departmentId': 'x'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error']['code'], 'invalid')
        self.assertIn('departmentId', response.data['error']['message'])

    def test_unexpected_errors_become_server_error(self):
        request = APIRequestFactory().get('/api/tokens')
        response = api_exception_handler(RuntimeError('boom'), {'request': request})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(
            response.data, {'ok': False, 'error': {'code': 'server_error', 'message': 'Internal server error'}},
        )
