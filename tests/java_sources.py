"""Java sources shared across the springmap tests."""

ORDER_CONTROLLER = """\
package com.shop.web;

import com.shop.service.OrderService;
import org.springframework.web.bind.annotation.*;

/**
 * Orders API.
 */
@RestController
@RequestMapping(
    value = "/api/orders",
    produces = "application/json")
public class OrderController extends BaseController implements Auditable {

    @Autowired
    private OrderService orderService;

    @GetMapping("/{id}")
    public Order get(@PathVariable("id") Long id) {
        return orderService.find(id);
    }

    @PostMapping
    public Order create(@RequestBody Order order) {
        validate(order);
        return orderService.save(order);
    }

    // @DeleteMapping("/{id}") is disabled
    private void validate(Order order) {
        if (order == null) {
            throw new IllegalArgumentException("order { missing");
        }
    }
}
"""

ORDER_SERVICE = """\
package com.shop.service;

import com.shop.repo.OrderRepository;
import static org.junit.Assert.assertTrue;
import java.util.*;

@Service
public class OrderService {
    @Autowired
    private OrderRepository orderRepository;
    private int count;

    public Order find(Long id) {
        return orderRepository.findById(id);
    }

    public Order save(Order order) {
        count++;
        return orderRepository.persist(order);
    }
}
"""

ORDER_REPOSITORY = """\
package com.shop.repo;

@Repository
public class OrderRepository {
    public Order findById(Long id) {
        return null;
    }

    public Order persist(Order order) {
        return order;
    }
}
"""

API_INTERFACE = """\
package com.shop.api;

public interface Api {
    class Nested {}

    void call();
}
"""
